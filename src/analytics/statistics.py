"""
Report statistics over one period of routine and mood records.

Rates are percentages in [0, 100] and fall back to 0 when their
denominator is empty; extremes (best/worst time, lowest/highest anxiety)
fall back to None.  Ties on an extreme go to the first record in input
order, which is date-ascending after records.load_records().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from constants import CHECKLIST_ITEMS
from records import MoodRecord, RoutineRecord

log = logging.getLogger("statistics")


@dataclass(frozen=True)
class ReportStatistics:
    # Morning routine
    total_morning_routines: int = 0
    completed_morning_routines: int = 0
    completion_rate: float = 0.0
    average_duration: float = 0.0
    best_time: Optional[int] = None
    best_time_date: Optional[datetime] = None
    worst_time: Optional[int] = None
    worst_time_date: Optional[datetime] = None

    # Anxiety
    average_anxiety: float = 0.0
    lowest_anxiety: Optional[int] = None
    lowest_anxiety_date: Optional[date] = None
    highest_anxiety: Optional[int] = None
    highest_anxiety_date: Optional[date] = None

    # Checklist
    shower_completion_rate: float = 0.0
    dressed_completion_rate: float = 0.0
    breakfast_completion_rate: float = 0.0
    meds_completion_rate: float = 0.0

    # Streaks
    current_streak: int = 0
    longest_streak: int = 0

    def checklist_rates(self) -> Dict[str, float]:
        """Item key -> completion rate, in checklist display order."""
        return {key: getattr(self, f"{key}_completion_rate") for key, _, _, _ in CHECKLIST_ITEMS}

    def to_dict(self) -> Dict[str, Any]:
        def iso(value):
            return value.isoformat() if value is not None else None

        return {
            "totalMorningRoutines": self.total_morning_routines,
            "completedMorningRoutines": self.completed_morning_routines,
            "completionRate": self.completion_rate,
            "averageDuration": self.average_duration,
            "bestTime": self.best_time,
            "bestTimeDate": iso(self.best_time_date),
            "worstTime": self.worst_time,
            "worstTimeDate": iso(self.worst_time_date),
            "averageAnxiety": self.average_anxiety,
            "lowestAnxiety": self.lowest_anxiety,
            "lowestAnxietyDate": iso(self.lowest_anxiety_date),
            "highestAnxiety": self.highest_anxiety,
            "highestAnxietyDate": iso(self.highest_anxiety_date),
            "showerCompletionRate": self.shower_completion_rate,
            "dressedCompletionRate": self.dressed_completion_rate,
            "breakfastCompletionRate": self.breakfast_completion_rate,
            "medsCompletionRate": self.meds_completion_rate,
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
        }


# ─── Building blocks ───────────────────────────────────────

def completed_only(routines: Iterable[RoutineRecord]) -> List[RoutineRecord]:
    return [r for r in routines if r.completed]


def timed_only(routines: Iterable[RoutineRecord]) -> List[RoutineRecord]:
    """Completed routines with a known duration."""
    return [r for r in routines if r.completed and r.duration_seconds is not None]


def percentage(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return part * 100 / whole


def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=np.float64)))


def checklist_rate(completed: Sequence[RoutineRecord], attr: str) -> float:
    """Share of completed routines with the checklist flag set."""
    return percentage(sum(1 for r in completed if getattr(r, attr)), len(completed))


def checklist_rates(completed: Sequence[RoutineRecord]) -> Dict[str, float]:
    return {key: checklist_rate(completed, attr) for key, attr, _, _ in CHECKLIST_ITEMS}


def compute_streaks(days: Iterable[date], reference_date: date) -> Tuple[int, int]:
    """Return (current_streak, longest_streak) over days with a completed routine.

    A run is a sequence of consecutive calendar days.  The current streak
    is the run position on reference_date, or on the day before it when
    reference_date itself has not been logged yet.
    """
    unique = sorted(set(days))
    if not unique:
        return 0, 0

    ser = pd.Series(pd.to_datetime(unique))
    run_id = ser.diff().dt.days.ne(1).cumsum()
    run_pos = ser.groupby(run_id).cumcount() + 1
    longest = int(run_pos.max())

    ref = pd.Timestamp(reference_date)
    live = (ser == ref) | (ser == ref - pd.Timedelta(days=1))
    current = int(run_pos[live].iloc[-1]) if live.any() else 0
    return current, longest


# ─── Aggregator ────────────────────────────────────────────

def compute_statistics(
    routines: Sequence[RoutineRecord],
    moods: Sequence[MoodRecord],
    *,
    reference_date: date,
) -> ReportStatistics:
    """Aggregate one report period. Never raises on well-formed records."""
    completed = completed_only(routines)
    timed = timed_only(routines)
    durations = [r.duration_seconds for r in timed]

    best_time = worst_time = None
    best_time_date = worst_time_date = None
    if durations:
        best_time = min(durations)
        worst_time = max(durations)
        best_time_date = next(r.started_at for r in timed if r.duration_seconds == best_time)
        worst_time_date = next(r.started_at for r in timed if r.duration_seconds == worst_time)

    lowest = highest = None
    if moods:
        lowest = min(moods, key=lambda m: m.anxiety_score)
        highest = max(moods, key=lambda m: m.anxiety_score)

    rates = checklist_rates(completed)
    current_streak, longest_streak = compute_streaks((r.day for r in completed), reference_date)

    stats = ReportStatistics(
        total_morning_routines=len(routines),
        completed_morning_routines=len(completed),
        completion_rate=percentage(len(completed), len(routines)),
        average_duration=mean(durations),
        best_time=best_time,
        best_time_date=best_time_date,
        worst_time=worst_time,
        worst_time_date=worst_time_date,
        average_anxiety=mean([m.anxiety_score for m in moods]),
        lowest_anxiety=lowest.anxiety_score if lowest is not None else None,
        lowest_anxiety_date=lowest.date if lowest is not None else None,
        highest_anxiety=highest.anxiety_score if highest is not None else None,
        highest_anxiety_date=highest.date if highest is not None else None,
        shower_completion_rate=rates["shower"],
        dressed_completion_rate=rates["dressed"],
        breakfast_completion_rate=rates["breakfast"],
        meds_completion_rate=rates["meds"],
        current_streak=current_streak,
        longest_streak=longest_streak,
    )
    log.debug(
        "Statistics: %d/%d routines completed, streak %d (longest %d)",
        stats.completed_morning_routines, stats.total_morning_routines,
        current_streak, longest_streak,
    )
    return stats
