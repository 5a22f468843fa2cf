"""Sheet builders turning snapshot records into report tables.

Each builder returns a Polars DataFrame whose columns are exactly the sheet
headers, in order, with a fixed schema so an empty input still yields a
header-only table. Columns that mix numbers with placeholder text keep their
numeric dtype with nulls; `SheetLayout.placeholders` names the text written
into those null cells.
"""

from __future__ import annotations

import datetime
import math
from dataclasses import dataclass, field
from typing import Any

import polars as pl

from labledger.config import settings
from labledger.models.lab import (
    BorrowRequest,
    Component,
    LoanStatus,
    RequestStatus,
    StockStatus,
)
from labledger.utils.dates import ceil_days, format_date, parse_timestamp

INVALID_DATE = "Invalid Date"
NOT_APPLICABLE = "N/A"
NOT_RETURNED = "Not Returned"
UNKNOWN_CATEGORY = "Unknown"


@dataclass(frozen=True)
class SheetLayout:
    """Presentation layout of one worksheet.

    Attributes:
        name: Worksheet title.
        schema: Ordered mapping of header -> Polars dtype.
        widths: Column widths in character units, one per header.
        header_color: Hex RGB fill of the header row.
        placeholders: Text written in place of nulls, per header.

    """

    name: str
    schema: dict[str, Any]
    widths: tuple[int, ...]
    header_color: str
    placeholders: dict[str, str] = field(default_factory=dict)

    @property
    def headers(self) -> list[str]:
        return list(self.schema)


BORROWING_RECORDS = SheetLayout(
    name="Borrowing Records",
    schema={
        "Record ID": pl.Utf8,
        "Student Name": pl.Utf8,
        "Roll Number": pl.Utf8,
        "Mobile Number": pl.Utf8,
        "Component Name": pl.Utf8,
        "Quantity": pl.Int64,
        "Borrowed Date": pl.Utf8,
        "Due Date": pl.Utf8,
        "Status": pl.Utf8,
        "Days Remaining": pl.Int64,
        "Approved By": pl.Utf8,
        "Return Date": pl.Utf8,
    },
    widths=(15, 20, 15, 15, 25, 10, 15, 15, 15, 15, 15, 15),
    header_color="FF9800",
    placeholders={"Days Remaining": NOT_APPLICABLE},
)

INVENTORY = SheetLayout(
    name="Inventory",
    schema={
        "Component Name": pl.Utf8,
        "Category": pl.Utf8,
        "Total Stock": pl.Int64,
        "Available Stock": pl.Int64,
        "Currently Borrowed": pl.Int64,
        "Stock Status": pl.Utf8,
        "Description": pl.Utf8,
    },
    widths=(25, 18, 15, 15, 18, 18, 30),
    header_color="795548",
)

CURRENTLY_BORROWED = SheetLayout(
    name="Currently Borrowed",
    schema={
        "Record ID": pl.Utf8,
        "Student Name": pl.Utf8,
        "Roll Number": pl.Utf8,
        "Mobile Number": pl.Utf8,
        "Component Name": pl.Utf8,
        "Category": pl.Utf8,
        "Quantity": pl.Int64,
        "Borrowed Date": pl.Utf8,
        "Due Date": pl.Utf8,
        "Days Remaining": pl.Int64,
        "Loan Status": pl.Utf8,
    },
    widths=(15, 20, 15, 15, 25, 18, 10, 15, 15, 15, 15),
    header_color="2196F3",
    placeholders={"Days Remaining": NOT_APPLICABLE},
)


def build_frame(layout: SheetLayout, rows: list[tuple]) -> pl.DataFrame:
    """Create a DataFrame with the layout's schema from row tuples."""
    if not rows:
        return pl.DataFrame(schema=layout.schema)
    return pl.DataFrame(rows, schema=layout.schema, orient="row")


def days_remaining(due_date: str | None, now: datetime.datetime) -> int | None:
    """Return whole days until `due_date`, rounded up.

    Args:
        due_date (str | None): Stored due date.
        now (datetime.datetime): Reference time.

    Returns:
        int | None: Positive for future due dates, negative for past ones, `None`
            when the due date is missing or invalid.

    """
    due = parse_timestamp(due_date)
    if due is None:
        return None
    return ceil_days(due, now)


def loan_status(remaining: int | None) -> LoanStatus:
    if remaining is None:
        return LoanStatus.UNKNOWN
    if remaining < 0:
        return LoanStatus.OVERDUE
    if remaining == 0:
        return LoanStatus.DUE_TODAY
    return LoanStatus.ON_LOAN


def stock_percentage(component: Component) -> float:
    """Return available stock as a percentage of total; `nan` when total is zero."""
    if component.total_quantity == 0:
        return math.nan
    return component.available_quantity / component.total_quantity * 100


def stock_status(
    component: Component,
    *,
    low_percent: float | None = None,
    medium_percent: float | None = None,
) -> StockStatus:
    """Classify a component's stock level.

    Thresholds default to `settings.low_stock_percent` and
    `settings.medium_stock_percent`. An empty shelf is always out of stock; a
    `nan` percentage (zero total stock) falls through to good stock.

    Args:
        component (Component): Inventory item to classify.
        low_percent (float | None): Upper bound (exclusive) of low stock.
        medium_percent (float | None): Upper bound (exclusive) of medium stock.

    Returns:
        StockStatus: The stock bucket.

    """
    low = settings.low_stock_percent if low_percent is None else low_percent
    medium = settings.medium_stock_percent if medium_percent is None else medium_percent
    if component.available_quantity == 0:
        return StockStatus.OUT_OF_STOCK
    percentage = stock_percentage(component)
    if percentage < low:
        return StockStatus.LOW
    if percentage < medium:
        return StockStatus.MEDIUM
    return StockStatus.GOOD


def _display_date(value: str | None, date_format: str | None, tz: str | None) -> str:
    rendered = format_date(
        value, date_format or settings.date_format, tz or settings.display_timezone
    )
    return INVALID_DATE if rendered is None else rendered


def borrowing_records_frame(
    requests: list[BorrowRequest],
    now: datetime.datetime,
    *,
    date_format: str | None = None,
    tz: str | None = None,
) -> pl.DataFrame:
    """Build the Borrowing Records table, one row per request.

    Days remaining are reported for approved requests only. Status is
    upper-cased, a missing approver reads "N/A" and a missing return date
    reads "Not Returned".

    Args:
        requests (list[BorrowRequest]): All requests in snapshot order.
        now (datetime.datetime): Reference time for days remaining.
        date_format (str | None): Override for `settings.date_format`.
        tz (str | None): Override for `settings.display_timezone`.

    Returns:
        pl.DataFrame: Table with the `BORROWING_RECORDS` schema.

    """
    rows = []
    for request in requests:
        remaining = (
            days_remaining(request.due_date, now)
            if request.status == RequestStatus.APPROVED
            else None
        )
        returned = (
            _display_date(request.returned_at, date_format, tz)
            if request.returned_at
            else NOT_RETURNED
        )
        rows.append(
            (
                request.id,
                request.student_name,
                request.roll_no,
                request.mobile,
                request.component_name,
                request.quantity,
                _display_date(request.request_date, date_format, tz),
                _display_date(request.due_date, date_format, tz),
                RequestStatus(request.status).value.upper(),
                remaining,
                request.approved_by or NOT_APPLICABLE,
                returned,
            )
        )
    return build_frame(BORROWING_RECORDS, rows)


def inventory_frame(components: list[Component]) -> pl.DataFrame:
    """Build the Inventory table, one row per component."""
    rows = [
        (
            component.name,
            component.category,
            component.total_quantity,
            component.available_quantity,
            component.borrowed_quantity,
            stock_status(component).value,
            component.description or settings.default_description,
        )
        for component in components
    ]
    return build_frame(INVENTORY, rows)


def currently_borrowed_frame(
    requests: list[BorrowRequest],
    components: list[Component],
    now: datetime.datetime,
    *,
    date_format: str | None = None,
    tz: str | None = None,
) -> pl.DataFrame:
    """Build the Currently Borrowed table from approved requests.

    Args:
        requests (list[BorrowRequest]): All requests; only approved ones are kept.
        components (list[Component]): Inventory used to look up categories.
        now (datetime.datetime): Reference time for days remaining.
        date_format (str | None): Override for `settings.date_format`.
        tz (str | None): Override for `settings.display_timezone`.

    Returns:
        pl.DataFrame: Table with the `CURRENTLY_BORROWED` schema.

    """
    categories = {c.id: c.category for c in components}
    rows = []
    for request in requests:
        if request.status != RequestStatus.APPROVED:
            continue
        remaining = days_remaining(request.due_date, now)
        rows.append(
            (
                request.id,
                request.student_name,
                request.roll_no,
                request.mobile,
                request.component_name,
                categories.get(request.component_id, UNKNOWN_CATEGORY),
                request.quantity,
                _display_date(request.request_date, date_format, tz),
                _display_date(request.due_date, date_format, tz),
                remaining,
                loan_status(remaining).value,
            )
        )
    return build_frame(CURRENTLY_BORROWED, rows)
