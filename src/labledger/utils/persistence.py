"""Helpers to read and write snapshot JSON files.

This module provides `load_snapshot` and `save_snapshot` to move `SystemData`
snapshots between disk and memory using the browser-store JSON layout.
"""

from __future__ import annotations

import json
import pathlib

from loguru import logger

from labledger.models.lab import SystemData, snapshot_from_dict, snapshot_to_dict


def load_snapshot(path: str | pathlib.Path) -> SystemData:
    """Load a snapshot JSON file exported from the dashboard.

    Args:
        path (str | pathlib.Path): Path to the JSON file.

    Returns:
        SystemData: The parsed snapshot.

    """
    p = pathlib.Path(path)
    with p.open(encoding="utf8") as fh:
        payload = json.load(fh)
    if not isinstance(payload, dict):
        raise ValueError(f"Snapshot file must contain a JSON object: {p}")
    data = snapshot_from_dict(payload)
    logger.debug(
        "Loaded snapshot from {}: requests={}, components={}, users={}, sessions={}",
        p,
        len(data.requests),
        len(data.components),
        len(data.users),
        len(data.sessions),
    )
    return data


def save_snapshot(data: SystemData, path: str | pathlib.Path) -> pathlib.Path:
    """Write a snapshot as camelCase JSON.

    Args:
        data (SystemData): Snapshot to persist.
        path (str | pathlib.Path): Target file path.

    Returns:
        pathlib.Path: Path to the written JSON file.

    """
    p = pathlib.Path(path)
    if p.is_dir():
        raise ValueError(f"Cannot write snapshot into a directory: {p}")
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf8") as fh:
        json.dump(snapshot_to_dict(data), fh, indent=2, ensure_ascii=False)
    return p
