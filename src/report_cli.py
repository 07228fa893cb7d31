"""
Morning Routine Report: command-line entry point
================================================
Builds one report from an exported JSON file:

    {"userName": ..., "dateFrom": "YYYY-MM-DD", "dateTo": "YYYY-MM-DD",
     "routines": [...], "moods": [...]}

Usage:
    python report_cli.py export.json                    # JSON envelope
    python report_cli.py export.json --format text      # readable report
    python report_cli.py export.json --reference-date 2026-03-01 -o out.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

import config

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger("report_cli")

from pipeline.summary_builder import build_text_report
from records import RecordValidationError, parse_day
from routes.helpers import _build_report_from_rows, _check_period


def render(payload: dict, fmt: str = "json", reference_date: date = None) -> str:
    """Build the report for one exported payload and render it."""
    period = (parse_day(payload.get("dateFrom"), "dateFrom"), parse_day(payload.get("dateTo"), "dateTo"))
    problem = _check_period(*period)
    if problem:
        raise RecordValidationError(problem, "dateFrom")

    report = _build_report_from_rows(
        payload.get("routines") or [],
        payload.get("moods") or [],
        user_name=payload.get("userName") or "",
        period=period,
        reference_date=reference_date,
        user_id=payload.get("userId"),
    )
    if fmt == "text":
        return build_text_report(report.to_dict())
    return json.dumps(report.to_dict(), ensure_ascii=False, indent=2)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Morning routine & anxiety report"
    )
    parser.add_argument("input", type=Path,
                        help="JSON export with routines and moods")
    parser.add_argument("--format", choices=("json", "text"), default="json",
                        help="Output format (default: json)")
    parser.add_argument("--reference-date", type=date.fromisoformat, default=None,
                        help="Day treated as 'today' for streaks (default: today)")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Write to this file instead of stdout")
    args = parser.parse_args(argv)

    try:
        payload = json.loads(args.input.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log.error("Could not read %s: %s", args.input, e)
        sys.exit(1)

    try:
        out = render(payload, args.format, args.reference_date)
    except RecordValidationError as e:
        log.error("Invalid input (%s): %s", e.field or "record", e)
        sys.exit(1)

    if args.output:
        args.output.write_text(out, encoding="utf-8")
        log.info("Report written to %s", args.output)
    else:
        sys.stdout.write(out if out.endswith("\n") else out + "\n")
    sys.exit(0)


if __name__ == "__main__":
    main()
