"""Report export for lending snapshots.

This module contains `ReportExporter`, which turns a `SystemData` snapshot
into a multi-sheet Excel workbook (Borrowing Records, Inventory, Currently
Borrowed and, optionally, User Activity Report) and into a small preview
structure for on-screen summaries.
"""

from __future__ import annotations

import dataclasses
import datetime
import pathlib
from dataclasses import dataclass, field
from typing import Any

import polars as pl
import xlsxwriter
from loguru import logger

from labledger.config import settings
from labledger.models.lab import (
    BorrowRequest,
    Component,
    RequestStatus,
    SystemData,
    camelize,
)
from labledger.processing.activity import USER_ACTIVITY, user_activity_frame
from labledger.processing.sheets import (
    BORROWING_RECORDS,
    CURRENTLY_BORROWED,
    INVENTORY,
    SheetLayout,
    borrowing_records_frame,
    currently_borrowed_frame,
    inventory_frame,
)
from labledger.utils.dates import ensure_utc, utc_now
from labledger.utils.validation import log_snapshot_issues

# Cell values are written verbatim; names like "=SUM" or "0123" stay text
WORKBOOK_OPTIONS = {
    "strings_to_formulas": False,
    "strings_to_numbers": False,
    "strings_to_urls": False,
    "nan_inf_to_errors": True,
}


@dataclass
class PreviewSummary:
    total_borrowing_records: int = 0
    currently_borrowed: int = 0
    total_returned: int = 0
    total_components: int = 0


@dataclass
class PreviewData:
    """On-screen summary of a snapshot: counts, the first records and the inventory."""

    summary: PreviewSummary
    borrowing_records: list[BorrowRequest] = field(default_factory=list)
    inventory: list[Component] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping with camelCase keys for the dashboard."""
        return camelize(dataclasses.asdict(self))


def write_workbook(
    sheets: list[tuple[SheetLayout, pl.DataFrame]], path: str | pathlib.Path
) -> pathlib.Path:
    """Write sheet tables into a single `.xlsx` workbook.

    Each sheet gets a bold, centred header row on the layout's fill colour,
    the layout's column widths, and one row per DataFrame row. Null cells in
    columns listed in `SheetLayout.placeholders` receive the placeholder text;
    other nulls stay blank.

    Args:
        sheets (list[tuple[SheetLayout, pl.DataFrame]]): Layouts with their tables,
            in workbook order.
        path (str | pathlib.Path): Output file; a missing `.xlsx` suffix is added.

    Returns:
        pathlib.Path: Path object pointing to the file written.

    """
    p = pathlib.Path(path)
    if p.suffix.lower() != ".xlsx":
        p = p.with_suffix(".xlsx")
    if p.is_dir():
        raise ValueError(f"Cannot write workbook into a directory: {p}")

    with xlsxwriter.Workbook(str(p), WORKBOOK_OPTIONS) as workbook:
        for layout, frame in sheets:
            if frame.columns != layout.headers:
                raise ValueError(
                    f"Sheet {layout.name!r} columns {frame.columns} do not match layout headers"
                )
            worksheet = workbook.add_worksheet(layout.name)
            header_format = workbook.add_format(
                {
                    "bold": True,
                    "font_color": "#FFFFFF",
                    "bg_color": f"#{layout.header_color}",
                    "align": "center",
                }
            )
            worksheet.write_row(0, 0, layout.headers, header_format)
            for col, width in enumerate(layout.widths):
                worksheet.set_column(col, col, width)

            placeholders = [layout.placeholders.get(h) for h in layout.headers]
            for row_idx, row in enumerate(frame.iter_rows(), start=1):
                for col, value in enumerate(row):
                    if value is None:
                        if placeholders[col] is not None:
                            worksheet.write_string(row_idx, col, placeholders[col])
                        continue
                    worksheet.write(row_idx, col, value)
    return p


class ReportExporter:
    """Stateless transformer from lending snapshots to report workbooks.

    Construct one per call or per process; every method takes the snapshot
    explicitly and nothing is cached between calls.
    """

    def __init__(
        self,
        *,
        app_name: str | None = None,
        include_user_activity: bool | None = None,
        preview_limit: int | None = None,
        date_format: str | None = None,
        tz: str | None = None,
    ) -> None:
        """Initialize a ReportExporter, defaulting every option to `settings`.

        Args:
            app_name (str | None): Prefix of the report filename.
            include_user_activity (bool | None): Append the User Activity Report sheet.
            preview_limit (int | None): Number of records included in previews.
            date_format (str | None): `strftime` pattern for date cells.
            tz (str | None): Timezone used to pick calendar dates.

        """
        self.app_name = app_name or settings.app_name
        self.include_user_activity = (
            settings.include_user_activity if include_user_activity is None else include_user_activity
        )
        self.preview_limit = settings.preview_limit if preview_limit is None else preview_limit
        self.date_format = date_format or settings.date_format
        self.tz = tz or settings.display_timezone
        self.logger = logger.bind(component=self.__class__.__name__)

    def report_filename(self, today: datetime.date) -> str:
        return f"{self.app_name}-Report-{today.isoformat()}.xlsx"

    def build_sheets(
        self, data: SystemData, now: datetime.datetime | None = None
    ) -> list[tuple[SheetLayout, pl.DataFrame]]:
        """Build every sheet table for `data` in workbook order.

        Args:
            data (SystemData): Snapshot to report on.
            now (datetime.datetime | None): Reference time; defaults to the current UTC time.

        Returns:
            list[tuple[SheetLayout, pl.DataFrame]]: Borrowing Records, Inventory and
                Currently Borrowed, followed by User Activity Report when enabled.

        """
        now = ensure_utc(now) if now is not None else utc_now()
        sheets = [
            (
                BORROWING_RECORDS,
                borrowing_records_frame(
                    data.requests, now, date_format=self.date_format, tz=self.tz
                ),
            ),
            (INVENTORY, inventory_frame(data.components)),
            (
                CURRENTLY_BORROWED,
                currently_borrowed_frame(
                    data.requests, data.components, now, date_format=self.date_format, tz=self.tz
                ),
            ),
        ]
        if self.include_user_activity:
            sheets.append(
                (
                    USER_ACTIVITY,
                    user_activity_frame(
                        data.users,
                        data.sessions,
                        data.requests,
                        now,
                        date_format=self.date_format,
                        tz=self.tz,
                    ),
                )
            )
        return sheets

    def export_to_excel(
        self,
        data: SystemData,
        output_dir: str | pathlib.Path | None = None,
        *,
        now: datetime.datetime | None = None,
    ) -> pathlib.Path:
        """Write the report workbook for `data` and return its path.

        The file is named `<app-name>-Report-<YYYY-MM-DD>.xlsx` after the UTC
        date of `now` and placed in `output_dir` (default `settings.output_dir`).
        Integrity problems in the snapshot are logged but do not stop the export;
        errors while writing propagate to the caller.

        Args:
            data (SystemData): Snapshot to report on.
            output_dir (str | pathlib.Path | None): Directory receiving the workbook.
            now (datetime.datetime | None): Reference time; defaults to the current UTC time.

        Returns:
            pathlib.Path: Path to the written workbook.

        """
        now = ensure_utc(now) if now is not None else utc_now()
        outdir = pathlib.Path(output_dir) if output_dir is not None else settings.output_dir
        outdir.mkdir(parents=True, exist_ok=True)

        issues = log_snapshot_issues(data)
        if issues:
            self.logger.warning("Exporting snapshot with {} integrity issue(s)", issues)

        sheets = self.build_sheets(data, now)
        path = write_workbook(sheets, outdir / self.report_filename(now.date()))
        self.logger.info(
            "Wrote report {} ({})",
            path,
            ", ".join(f"{layout.name}={frame.height}" for layout, frame in sheets),
        )
        return path

    def generate_preview_data(self, data: SystemData) -> PreviewData:
        """Summarise a snapshot for on-screen display.

        Args:
            data (SystemData): Snapshot to summarise.

        Returns:
            PreviewData: Status counts, the first `preview_limit` requests and the
                full component list.

        """
        summary = PreviewSummary(
            total_borrowing_records=len(data.requests),
            currently_borrowed=len(data.requests_with_status(RequestStatus.APPROVED)),
            total_returned=len(data.requests_with_status(RequestStatus.RETURNED)),
            total_components=len(data.components),
        )
        return PreviewData(
            summary=summary,
            borrowing_records=list(data.requests[: self.preview_limit]),
            inventory=list(data.components),
        )
