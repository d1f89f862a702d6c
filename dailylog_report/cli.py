"""Command-line entry point: JSON records in, PDF report out."""

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .composer import DEFAULT_TITLE, render_report
from .exceptions import RecordLoadError
from .loader import load_records, parse_timestamp
from .log import configure_logging, get_logger

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dailylog-report",
        description="Render journal records to a paginated PDF activity report.",
    )
    parser.add_argument("records", type=Path, help="JSON file with the records to export")
    parser.add_argument("-o", "--output", type=Path, default=Path("output/activity_report.pdf"),
                        help="Where to write the PDF (default: %(default)s)")
    parser.add_argument("--generated-at", type=parse_timestamp, default=None,
                        help="Report timestamp in ISO 8601 (default: now)")
    parser.add_argument("--title", default=DEFAULT_TITLE, help="Report title")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    print(f"Loading records from {args.records}...")
    try:
        records = load_records(args.records)
    except RecordLoadError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"  {len(records)} records")

    generated_at = args.generated_at or datetime.now()
    report = render_report(records, generated_at, title=args.title)

    for entry in report.summary:
        print(f"  {entry.glyph} {entry.label}: {entry.count}")
    if report.untimed_count:
        print(f"  {report.untimed_count} records without a timestamp were omitted")

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(report.pdf_bytes)

    print("\n" + "=" * 50)
    print("REPORT COMPLETE")
    print("=" * 50)
    print(f"Output: {args.output}")
    print(f"Pages: {report.page_count}")
    return 0
