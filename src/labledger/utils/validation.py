"""Integrity checks for lending snapshots.

The exporter accepts snapshots as they are; these helpers only centralize the
checks whose findings are worth logging before a report is produced.
"""

from __future__ import annotations

from collections import Counter

from loguru import logger

from labledger.models.lab import SystemData
from labledger.utils.dates import parse_timestamp


def _duplicate_ids(ids: list[str]) -> list[str]:
    return sorted(k for k, count in Counter(ids).items() if count > 1)


def find_snapshot_issues(data: SystemData) -> list[str]:
    """Collect human-readable integrity problems found in a snapshot.

    - Component availability outside `[0, total_quantity]`.
    - Duplicate component or request ids.
    - Requests referencing a component id not present in the inventory.
    - Requests with an unparseable due date.

    Args:
        data (SystemData): Snapshot to inspect.

    Returns:
        list[str]: One message per problem; empty when the snapshot is consistent.

    """
    issues: list[str] = []
    for component in data.components:
        if component.total_quantity < 0:
            issues.append(f"Component {component.id} has negative total quantity")
        if not 0 <= component.available_quantity <= max(component.total_quantity, 0):
            issues.append(
                f"Component {component.id} has available quantity "
                f"{component.available_quantity} outside 0..{component.total_quantity}"
            )

    for dup in _duplicate_ids([c.id for c in data.components]):
        issues.append(f"Duplicate component id {dup}")
    for dup in _duplicate_ids([r.id for r in data.requests]):
        issues.append(f"Duplicate request id {dup}")

    known = {c.id for c in data.components}
    for request in data.requests:
        if request.component_id not in known:
            issues.append(f"Request {request.id} references unknown component {request.component_id}")
        if parse_timestamp(request.due_date) is None:
            issues.append(f"Request {request.id} has invalid due date {request.due_date!r}")
    return issues


def log_snapshot_issues(data: SystemData) -> int:
    """Log every integrity problem as a warning and return how many were found."""
    issues = find_snapshot_issues(data)
    for issue in issues:
        logger.warning("Snapshot integrity: {}", issue)
    return len(issues)
