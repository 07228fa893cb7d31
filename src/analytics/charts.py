"""Chart-ready series for the report UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Sequence, Tuple

from analytics.statistics import checklist_rates, completed_only, timed_only
from constants import CHECKLIST_ITEMS
from records import MoodRecord, RoutineRecord


@dataclass(frozen=True)
class DataPoint:
    date: date
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "value": self.value}


@dataclass(frozen=True)
class ChecklistSeries:
    labels: Tuple[str, ...] = ()
    values: Tuple[float, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"labels": list(self.labels), "values": list(self.values)}


@dataclass(frozen=True)
class ChartSeries:
    anxiety_over_time: List[DataPoint] = field(default_factory=list)
    duration_over_time: List[DataPoint] = field(default_factory=list)
    checklist_completion: ChecklistSeries = field(default_factory=ChecklistSeries)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "anxietyOverTime": [p.to_dict() for p in self.anxiety_over_time],
            "durationOverTime": [p.to_dict() for p in self.duration_over_time],
            "checklistCompletion": self.checklist_completion.to_dict(),
        }


def build_chart_series(
    routines: Sequence[RoutineRecord], moods: Sequence[MoodRecord]
) -> ChartSeries:
    """Build all three chart series from the raw records.

    Points keep input order; callers pass date-ascending collections.
    Duration points are in fractional minutes and point at started_at.
    """
    anxiety = [DataPoint(m.date, m.anxiety_score) for m in moods]
    duration = [DataPoint(r.started_at, r.duration_seconds / 60) for r in timed_only(routines)]

    rates = checklist_rates(completed_only(routines))
    checklist = ChecklistSeries(
        labels=tuple(label for _, _, label, _ in CHECKLIST_ITEMS),
        values=tuple(rates[key] for key, _, _, _ in CHECKLIST_ITEMS),
    )
    return ChartSeries(
        anxiety_over_time=anxiety,
        duration_over_time=duration,
        checklist_completion=checklist,
    )
