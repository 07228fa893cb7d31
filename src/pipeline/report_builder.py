"""Report assembly: one call per report request, no shared state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from analytics.charts import ChartSeries, build_chart_series
from analytics.insights import Insight, generate_insights
from analytics.statistics import ReportStatistics, compute_statistics
from records import MoodRecord, RoutineRecord

log = logging.getLogger("report_builder")


@dataclass(frozen=True)
class Report:
    user_name: str
    period_from: date
    period_to: date
    statistics: ReportStatistics
    insights: List[Insight] = field(default_factory=list)
    charts: ChartSeries = field(default_factory=ChartSeries)
    user_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "userName": self.user_name,
            "period": {
                "from": self.period_from.isoformat(),
                "to": self.period_to.isoformat(),
            },
            "statistics": self.statistics.to_dict(),
            "insights": [i.to_dict() for i in self.insights],
            "charts": self.charts.to_dict(),
        }


def build_report(
    routines: Sequence[RoutineRecord],
    moods: Sequence[MoodRecord],
    *,
    user_name: str,
    period_from: date,
    period_to: date,
    reference_date: date,
    user_id: Optional[str] = None,
) -> Report:
    """Run statistics, insights and charts over already-filtered records."""
    statistics = compute_statistics(routines, moods, reference_date=reference_date)
    insights = generate_insights(routines, moods, statistics)
    charts = build_chart_series(routines, moods)

    log.info(
        "Report %s..%s: %d routines, %d mood records, %d insights",
        period_from, period_to, len(routines), len(moods), len(insights),
    )
    return Report(
        user_name=user_name,
        period_from=period_from,
        period_to=period_to,
        statistics=statistics,
        insights=insights,
        charts=charts,
        user_id=user_id,
    )
