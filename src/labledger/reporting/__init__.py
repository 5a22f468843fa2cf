"""Reporting module exporting the report exporter and workbook writer.

This package exposes the helpers that turn lending snapshots into Excel
workbooks and preview summaries.
"""

from .export import PreviewData as PreviewData
from .export import PreviewSummary as PreviewSummary
from .export import ReportExporter as ReportExporter
from .export import write_workbook as write_workbook
