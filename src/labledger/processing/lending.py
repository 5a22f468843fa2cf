"""Borrow and return transactions against a snapshot.

Both operations return a new `SystemData` and leave the input untouched. The
inventory invariant `0 <= available_quantity <= total_quantity` is kept by
refusing borrows that exceed the available stock and by capping returns at
the total stock.
"""

from __future__ import annotations

import dataclasses
import datetime

from loguru import logger

from labledger.models.lab import BorrowRequest, RequestStatus, SystemData
from labledger.utils.dates import ensure_utc, epoch_millis, to_iso, utc_now


class LendingError(ValueError):
    """Base class for rejected lending transactions."""


class ComponentNotFoundError(LendingError):
    pass


class InsufficientStockError(LendingError):
    pass


class RequestNotFoundError(LendingError):
    pass


class InvalidTransitionError(LendingError):
    pass


def record_borrowing(
    data: SystemData,
    *,
    component_id: str,
    student_name: str,
    roll_no: str,
    mobile: str,
    quantity: int,
    due_date: str,
    approved_by: str = "Staff",
    now: datetime.datetime | None = None,
) -> tuple[SystemData, BorrowRequest]:
    """Record a staff-entered borrow, approving it immediately.

    Args:
        data (SystemData): Current snapshot.
        component_id (str): Id of the component being lent.
        student_name (str): Borrower's name.
        roll_no (str): Borrower's roll number.
        mobile (str): Borrower's mobile number.
        quantity (int): Units lent; must be between 1 and the available stock.
        due_date (str): ISO date the loan is due back.
        approved_by (str): Name recorded as approver.
        now (datetime.datetime | None): Transaction time; defaults to the current UTC time.

    Returns:
        tuple[SystemData, BorrowRequest]: The updated snapshot and the new request.

    Raises:
        ComponentNotFoundError: When `component_id` is not in the inventory.
        InsufficientStockError: When `quantity` is not positive or exceeds the
            available stock.

    """
    now = ensure_utc(now) if now is not None else utc_now()
    component = data.component_by_id(component_id)
    if component is None:
        raise ComponentNotFoundError(f"Component not found: {component_id}")
    if quantity < 1:
        raise InsufficientStockError(f"Quantity must be at least 1, got {quantity}")
    if quantity > component.available_quantity:
        raise InsufficientStockError(
            f"Not enough components available: requested {quantity}, "
            f"available {component.available_quantity}"
        )

    stamp = epoch_millis(now)
    timestamp = to_iso(now)
    request = BorrowRequest(
        id=f"req-{stamp}",
        student_id=f"student-{stamp}",
        student_name=student_name,
        roll_no=roll_no,
        mobile=mobile,
        component_id=component.id,
        component_name=component.name,
        quantity=quantity,
        request_date=timestamp,
        due_date=due_date,
        status=RequestStatus.APPROVED,
        approved_by=approved_by,
        approved_at=timestamp,
    )
    updated = dataclasses.replace(
        component, available_quantity=component.available_quantity - quantity
    )
    components = [updated if c.id == component.id else c for c in data.components]
    logger.info(
        "Recorded borrowing {} of {} x{} for {}", request.id, component.name, quantity, student_name
    )
    return (
        dataclasses.replace(data, components=components, requests=[*data.requests, request]),
        request,
    )


def record_return(
    data: SystemData,
    request_id: str,
    *,
    now: datetime.datetime | None = None,
) -> SystemData:
    """Mark an approved request as returned and restock its component.

    Args:
        data (SystemData): Current snapshot.
        request_id (str): Id of the request being returned.
        now (datetime.datetime | None): Return time; defaults to the current UTC time.

    Returns:
        SystemData: The updated snapshot.

    Raises:
        RequestNotFoundError: When no request has `request_id`.
        InvalidTransitionError: When the request is not currently approved.

    """
    now = ensure_utc(now) if now is not None else utc_now()
    request = next((r for r in data.requests if r.id == request_id), None)
    if request is None:
        raise RequestNotFoundError(f"Request not found: {request_id}")
    if request.status != RequestStatus.APPROVED:
        raise InvalidTransitionError(
            f"Only approved requests can be returned; {request_id} is {RequestStatus(request.status).value}"
        )

    returned = dataclasses.replace(
        request, status=RequestStatus.RETURNED, returned_at=to_iso(now)
    )
    requests = [returned if r.id == request_id else r for r in data.requests]

    components = []
    for component in data.components:
        if component.id == request.component_id:
            restocked = min(component.available_quantity + request.quantity, component.total_quantity)
            component = dataclasses.replace(component, available_quantity=restocked)
        components.append(component)
    if data.component_by_id(request.component_id) is None:
        logger.warning(
            "Returned request {} references unknown component {}", request_id, request.component_id
        )

    logger.info("Recorded return of {} ({})", request_id, request.component_name)
    return dataclasses.replace(data, requests=requests, components=components)
