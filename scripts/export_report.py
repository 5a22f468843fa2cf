"""Export a lending snapshot to the staff Excel report.

This script demonstrates how to use the library to:
1. Load a snapshot JSON file saved from the dashboard's local storage
2. Log any integrity problems found in the snapshot
3. Write the Borrowing Records / Inventory / Currently Borrowed workbook
4. Optionally print the on-screen preview summary as JSON
"""

from __future__ import annotations

import argparse
import json
import pathlib

from labledger.config import settings
from labledger.reporting import ReportExporter
from labledger.utils.logging import configure_logging
from labledger.utils.persistence import load_snapshot


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser("Export a lab lending snapshot to an Excel report")
    parser.add_argument("snapshot", type=pathlib.Path, help="Snapshot JSON file")
    parser.add_argument("--output-dir", type=pathlib.Path, default=settings.output_dir)
    parser.add_argument(
        "--include-user-activity",
        action="store_true",
        help="Append the User Activity Report sheet",
    )
    parser.add_argument(
        "--preview", action="store_true", help="Print the preview summary as JSON"
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()

    data = load_snapshot(args.snapshot)
    exporter = ReportExporter(include_user_activity=args.include_user_activity or None)

    if args.preview:
        print(json.dumps(exporter.generate_preview_data(data).to_dict(), indent=2))

    path = exporter.export_to_excel(data, args.output_dir)
    print(f"Report written to {path}")


if __name__ == "__main__":
    main()
