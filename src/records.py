"""
Routine and mood records, plus the ingestion boundary that builds them.

Rows arrive from the persistence layer (or a JSON request body) as plain
mappings with either camelCase or snake_case keys.  Everything that can be
wrong with a row is rejected here, so the analytics modules can assume
well-formed input:

  - completed routines always carry ended_at and duration_seconds
  - duration_seconds == floor(ended_at - started_at), never negative
  - anxiety scores are integers in 0..10
  - at most one mood record per calendar day
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import config
from constants import ANXIETY_MAX, ANXIETY_MIN, CHECKLIST_ITEMS

log = logging.getLogger("records")

# Allowed drift between a stored duration and ended_at - started_at
DURATION_TOLERANCE_SEC = 1


class RecordValidationError(ValueError):
    """A row violates the record invariants."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class RoutineRecord:
    """One timed morning-routine session."""
    id: str
    user_id: str
    started_at: datetime
    ended_at: Optional[datetime] = None
    duration_seconds: Optional[int] = None
    took_shower: bool = False
    got_dressed: bool = False
    had_breakfast: bool = False
    took_meds: bool = False
    completed: bool = False

    @property
    def day(self) -> date:
        """Civil date the session started on."""
        return self.started_at.date()

    def checklist(self) -> Dict[str, bool]:
        return {key: bool(getattr(self, attr)) for key, attr, _, _ in CHECKLIST_ITEMS}


@dataclass(frozen=True)
class MoodRecord:
    """Daily anxiety check-in."""
    id: str
    user_id: str
    date: date
    anxiety_score: int
    notes: Optional[str] = None


# ─── Coercion helpers ──────────────────────────────────────

def _pick(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return None


def _report_zone() -> ZoneInfo:
    try:
        return ZoneInfo(config.REPORT_TIMEZONE)
    except ZoneInfoNotFoundError:
        log.warning("Unknown REPORT_TIMEZONE %r, falling back to UTC", config.REPORT_TIMEZONE)
        return ZoneInfo("UTC")


def parse_timestamp(value: Any, field: str = "timestamp") -> datetime:
    """Parse a datetime or ISO-8601 string into naive local time.

    Aware values are converted to the report timezone first, so every
    timestamp in a collection compares and sorts on the same wall clock.
    """
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, date):
        ts = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            ts = datetime.fromisoformat(text)
        except ValueError:
            raise RecordValidationError(f"{field} is not a valid ISO-8601 timestamp: {value!r}", field)
    else:
        raise RecordValidationError(f"{field} is required", field)

    if ts.tzinfo is not None:
        ts = ts.astimezone(_report_zone()).replace(tzinfo=None)
    return ts


def parse_day(value: Any, field: str = "date") -> date:
    """Parse a calendar day; timestamps are truncated to their civil date."""
    if isinstance(value, datetime):
        return parse_timestamp(value, field).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise RecordValidationError(f"{field} is not a valid date: {value!r}", field)
    return parse_timestamp(value, field).date()


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y", "t")
    return bool(value)


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise RecordValidationError(f"{field} must be an integer", field)
    if isinstance(value, float):
        if not value.is_integer():
            raise RecordValidationError(f"{field} must be an integer: {value!r}", field)
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise RecordValidationError(f"{field} must be an integer: {value!r}", field)


def _elapsed_seconds(started_at: datetime, ended_at: datetime) -> int:
    return int((ended_at - started_at).total_seconds() // 1)


# ─── Row → record ──────────────────────────────────────────

def routine_from_row(row: Mapping[str, Any]) -> RoutineRecord:
    """Build a RoutineRecord from a DB row or JSON object."""
    started_raw = _pick(row, "startedAt", "started_at")
    started_at = parse_timestamp(started_raw, "startedAt")

    ended_raw = _pick(row, "endedAt", "ended_at")
    ended_at = parse_timestamp(ended_raw, "endedAt") if ended_raw is not None else None

    duration_raw = _pick(row, "durationSeconds", "duration_seconds")
    duration = _as_int(duration_raw, "durationSeconds") if duration_raw is not None else None

    if ended_at is not None:
        if ended_at < started_at:
            raise RecordValidationError("endedAt precedes startedAt", "endedAt")
        elapsed = _elapsed_seconds(started_at, ended_at)
        if duration is None:
            duration = elapsed
        elif abs(duration - elapsed) > DURATION_TOLERANCE_SEC:
            raise RecordValidationError(
                f"durationSeconds={duration} disagrees with endedAt - startedAt ({elapsed}s)",
                "durationSeconds",
            )

    if duration is not None and duration < 0:
        raise RecordValidationError("durationSeconds must be non-negative", "durationSeconds")

    completed = _as_bool(_pick(row, "completed"))
    if completed and (ended_at is None or duration is None):
        raise RecordValidationError("completed routine needs endedAt and durationSeconds", "completed")

    return RoutineRecord(
        id=str(_pick(row, "id") or ""),
        user_id=str(_pick(row, "userId", "user_id") or ""),
        started_at=started_at,
        ended_at=ended_at,
        duration_seconds=duration,
        took_shower=_as_bool(_pick(row, "tookShower", "took_shower")),
        got_dressed=_as_bool(_pick(row, "gotDressed", "got_dressed")),
        had_breakfast=_as_bool(_pick(row, "hadBreakfast", "had_breakfast")),
        took_meds=_as_bool(_pick(row, "tookMeds", "took_meds")),
        completed=completed,
    )


def mood_from_row(row: Mapping[str, Any]) -> MoodRecord:
    """Build a MoodRecord from a DB row or JSON object."""
    day = parse_day(_pick(row, "date"), "date")

    score_raw = _pick(row, "anxietyScore", "anxiety_score")
    if score_raw is None:
        raise RecordValidationError("anxietyScore is required", "anxietyScore")
    score = _as_int(score_raw, "anxietyScore")
    if not ANXIETY_MIN <= score <= ANXIETY_MAX:
        raise RecordValidationError(
            f"anxietyScore must be between {ANXIETY_MIN} and {ANXIETY_MAX}, got {score}",
            "anxietyScore",
        )

    notes = _pick(row, "notes")
    return MoodRecord(
        id=str(_pick(row, "id") or ""),
        user_id=str(_pick(row, "userId", "user_id") or ""),
        date=day,
        anxiety_score=score,
        notes=str(notes) if notes is not None else None,
    )


def load_records(
    routine_rows: Iterable[Mapping[str, Any]],
    mood_rows: Iterable[Mapping[str, Any]],
) -> Tuple[Tuple[RoutineRecord, ...], Tuple[MoodRecord, ...]]:
    """Validate rows and return both collections in ascending date order."""
    routines = [routine_from_row(r) for r in routine_rows]
    moods = [mood_from_row(m) for m in mood_rows]

    seen: Dict[date, str] = {}
    for mood in moods:
        if mood.date in seen:
            raise RecordValidationError(f"duplicate mood record for {mood.date.isoformat()}", "date")
        seen[mood.date] = mood.id

    routines.sort(key=lambda r: r.started_at)
    moods.sort(key=lambda m: m.date)
    log.debug("Loaded %d routines and %d mood records", len(routines), len(moods))
    return tuple(routines), tuple(moods)


# ─── Session operations ────────────────────────────────────

def finish_routine(record: RoutineRecord, ended_at: datetime, **checklist: bool) -> RoutineRecord:
    """Close an open session. Every checklist item has to be ticked."""
    attrs = {attr for _, attr, _, _ in CHECKLIST_ITEMS}
    unknown = set(checklist) - attrs
    if unknown:
        raise RecordValidationError(f"unknown checklist items: {', '.join(sorted(unknown))}", "checklist")
    missing = [attr for _, attr, _, _ in CHECKLIST_ITEMS if not checklist.get(attr)]
    if missing:
        raise RecordValidationError(
            "all checklist items must be ticked before finishing: " + ", ".join(missing),
            "checklist",
        )
    if ended_at < record.started_at:
        raise RecordValidationError("endedAt precedes startedAt", "endedAt")

    return replace(
        record,
        ended_at=ended_at,
        duration_seconds=_elapsed_seconds(record.started_at, ended_at),
        completed=True,
        **{attr: True for attr in attrs},
    )


def best_routine_between(
    routines: Sequence[RoutineRecord], start: date, end: date
) -> Optional[RoutineRecord]:
    """Fastest completed session with start <= day <= end; earliest wins ties."""
    candidates: List[RoutineRecord] = [
        r for r in routines
        if r.completed and r.duration_seconds is not None and start <= r.day <= end
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda r: r.duration_seconds)
