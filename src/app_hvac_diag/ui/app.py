"""
Console Application - HVAC Cycle Diagnostics

Usage:
    python -m app_hvac_diag reading.json
    python -m app_hvac_diag readings.json --json
    python -m app_hvac_diag reading.json --timestamp 2026-03-05T10:00:00+00:00

The input file holds one reading record or a list of them.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-06
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

from app_hvac_diag.core.errors import CycleDiagnosticsError
from app_hvac_diag.modules.report import ReportView
from app_hvac_diag.modules.service_check import ServiceCheckController

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hvac-diag",
        description="Diagnose a vapor compression system from gauge and thermometer readings",
    )
    parser.add_argument("reading", help="JSON file with a reading record or a list of records")
    parser.add_argument("--json", action="store_true", help="Print the JSON report instead of the console view")
    parser.add_argument("--timestamp", help="Report timestamp (ISO 8601), default: now (UTC)")
    parser.add_argument("--brief", action="store_true", help="One-line summary per reading")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def parse_timestamp(value: Optional[str]) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid ISO 8601 timestamp: {value!r}") from None


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the console application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        timestamp = parse_timestamp(args.timestamp)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        with open(args.reading, encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Cannot read {args.reading}: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    records = data if isinstance(data, list) else [data]
    controller = ServiceCheckController()
    try:
        reports = controller.run_many(records, timestamp)
    except CycleDiagnosticsError as e:
        logger.debug("Service check failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    if args.json:
        payload = [r.to_dict() for r in reports]
        print(json.dumps(payload if isinstance(data, list) else payload[0],
                         indent=2, sort_keys=True, ensure_ascii=False))
    else:
        for report in reports:
            if args.brief:
                ReportView.display_summary(report)
            else:
                ReportView.display_report(report)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
