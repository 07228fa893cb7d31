"""
Shared helpers for API routes.
Contains: request coercion, report-timezone clock, report assembly from rows.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import config
from pipeline.report_builder import Report, build_report
from records import load_records

log = logging.getLogger("api")


def _text(value: Any) -> str:
    return str(value) if value is not None else ""


def _today() -> date:
    """Current civil date in the report timezone."""
    try:
        zone = ZoneInfo(config.REPORT_TIMEZONE)
    except ZoneInfoNotFoundError:
        log.warning("Unknown REPORT_TIMEZONE %r, using UTC for today", config.REPORT_TIMEZONE)
        zone = ZoneInfo("UTC")
    return datetime.now(zone).date()


def _check_period(date_from: date, date_to: date) -> Optional[str]:
    if date_from > date_to:
        return f"dateFrom ({date_from.isoformat()}) is after dateTo ({date_to.isoformat()})"
    return None


def _build_report_from_rows(
    routine_rows: List[Dict[str, Any]],
    mood_rows: List[Dict[str, Any]],
    *,
    user_name: str,
    period: Tuple[date, date],
    reference_date: Optional[date] = None,
    user_id: Optional[str] = None,
) -> Report:
    """Ingest raw rows and run the report pipeline.

    Raises records.RecordValidationError on malformed rows.
    """
    routines, moods = load_records(routine_rows, mood_rows)
    return build_report(
        routines,
        moods,
        user_name=_text(user_name),
        period_from=period[0],
        period_to=period[1],
        reference_date=reference_date or _today(),
        user_id=user_id,
    )
