"""
Deterministic report insights: no model, only thresholds and templates.

Checks run in a fixed order and that order is what the user sees:

  1. anxiety × duration correlation
  2. completion-rate feedback
  3. medication impact on anxiety
  4. best time
  5. current streak
  6. high-anxiety pattern
  7. most neglected checklist item

A check without enough data is skipped silently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from analytics.formatting import format_date, format_duration
from analytics.statistics import ReportStatistics, completed_only, mean, percentage, timed_only
from constants import (
    CHECKLIST_ITEMS,
    COMPLETION_EXCELLENT_PCT,
    COMPLETION_LOW_PCT,
    CORRELATION_MIN_GAP_SEC,
    CORRELATION_MIN_ROUTINES,
    HIGH_ANXIETY_CUTOFF,
    HIGH_ANXIETY_MIN_DAYS,
    HIGH_ANXIETY_SCORE,
    MEDS_MIN_GAP,
    MEDS_MIN_ROUTINES,
    MEDS_MIN_SAMPLES,
    NEGLECTED_ITEM_PCT,
    STREAK_CELEBRATION_DAYS,
)
from records import MoodRecord, RoutineRecord

log = logging.getLogger("insights")


@dataclass(frozen=True)
class Insight:
    type: str
    title: str
    description: str
    severity: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {"type": self.type, "title": self.title, "description": self.description}
        if self.severity is not None:
            out["severity"] = self.severity
        return out


def _anxiety_by_day(moods: Sequence[MoodRecord]) -> Dict[date, int]:
    return {m.date: m.anxiety_score for m in moods}


# ─── Individual checks ─────────────────────────────────────

def anxiety_duration_correlation(
    routines: Sequence[RoutineRecord], moods: Sequence[MoodRecord]
) -> Optional[Insight]:
    timed = timed_only(routines)
    if len(timed) < CORRELATION_MIN_ROUTINES:
        return None

    anxiety = _anxiety_by_day(moods)
    high: List[int] = []
    low: List[int] = []
    for r in timed:
        score = anxiety.get(r.day)
        if score is None:
            continue
        (high if score > HIGH_ANXIETY_CUTOFF else low).append(r.duration_seconds)

    if not high or not low:
        return None

    diff = mean(high) - mean(low)
    log.debug("Correlation: high=%d low=%d diff=%.1fs", len(high), len(low), diff)
    if abs(diff) <= CORRELATION_MIN_GAP_SEC:
        return None

    direction = "a mais" if diff > 0 else "a menos"
    return Insight(
        type="correlation",
        title="Correlação: Ansiedade × Duração",
        description=(
            f"Nos dias com ansiedade alta (>{HIGH_ANXIETY_CUTOFF}), sua rotina leva em média "
            f"{format_duration(abs(diff))} {direction} que nos dias com ansiedade baixa."
        ),
        severity="info" if diff > 0 else "success",
    )


def completion_feedback(stats: ReportStatistics) -> Optional[Insight]:
    # Zero routines is "no data", not a low completion rate
    if stats.total_morning_routines == 0:
        return None

    rate = stats.completion_rate
    if rate >= COMPLETION_EXCELLENT_PCT:
        return Insight(
            type="achievement",
            title="Excelente consistência!",
            description=f"Você completou {rate:.1f}% das rotinas neste período. Continue assim!",
            severity="success",
        )
    if rate < COMPLETION_LOW_PCT:
        return Insight(
            type="recommendation",
            title="Oportunidade de melhoria",
            description=(
                f"Sua taxa de conclusão está em {rate:.1f}%. "
                "Tente definir um horário fixo para a rotina da manhã."
            ),
            severity="warning",
        )
    return None


def medication_impact(
    routines: Sequence[RoutineRecord], moods: Sequence[MoodRecord]
) -> Optional[Insight]:
    completed = completed_only(routines)
    if len(completed) < MEDS_MIN_ROUTINES:
        return None

    anxiety = _anxiety_by_day(moods)
    with_meds: List[int] = []
    without_meds: List[int] = []
    for r in completed:
        score = anxiety.get(r.day)
        if score is None:
            continue
        (with_meds if r.took_meds else without_meds).append(score)

    if len(with_meds) < MEDS_MIN_SAMPLES or len(without_meds) < MEDS_MIN_SAMPLES:
        return None

    avg_with = mean(with_meds)
    avg_without = mean(without_meds)
    diff = avg_without - avg_with
    if abs(diff) <= MEDS_MIN_GAP:
        return None

    return Insight(
        type="pattern",
        title="Impacto dos Remédios",
        description=(
            f"Sua ansiedade média nos dias com remédios foi {avg_with:.1f}, "
            f"enquanto nos dias sem remédios foi {avg_without:.1f}."
        ),
        severity="info" if diff > 0 else "warning",
    )


def best_time(stats: ReportStatistics) -> Optional[Insight]:
    if stats.best_time is None or stats.best_time_date is None:
        return None
    return Insight(
        type="achievement",
        title="Seu melhor tempo",
        description=(
            f"Seu recorde foi de {format_duration(stats.best_time)} "
            f"no dia {format_date(stats.best_time_date)}."
        ),
        severity="success",
    )


def streak_celebration(stats: ReportStatistics) -> Optional[Insight]:
    if stats.current_streak < STREAK_CELEBRATION_DAYS:
        return None
    return Insight(
        type="achievement",
        title="Sequência incrível!",
        description=f"Você está há {stats.current_streak} dias consecutivos completando sua rotina! 🔥",
        severity="success",
    )


def high_anxiety_pattern(moods: Sequence[MoodRecord]) -> Optional[Insight]:
    high_days = sum(1 for m in moods if m.anxiety_score >= HIGH_ANXIETY_SCORE)
    if high_days < HIGH_ANXIETY_MIN_DAYS:
        return None

    share = percentage(high_days, len(moods))
    return Insight(
        type="pattern",
        title="Padrão de Ansiedade Alta",
        description=(
            f"Você registrou ansiedade alta (≥{HIGH_ANXIETY_SCORE}) em {high_days} dias "
            f"({share:.1f}% do período). Considere conversar com seu terapeuta sobre "
            "estratégias adicionais."
        ),
        severity="warning",
    )


def most_neglected_item(stats: ReportStatistics) -> Optional[Insight]:
    # With no completed routine every rate is the 0 placeholder
    if stats.completed_morning_routines == 0:
        return None

    rates = stats.checklist_rates()
    name, rate = None, None
    for key, _, _, sentence_name in CHECKLIST_ITEMS:
        if rate is None or rates[key] < rate:
            name, rate = sentence_name, rates[key]

    if rate >= NEGLECTED_ITEM_PCT:
        return None
    return Insight(
        type="recommendation",
        title="Item mais negligenciado",
        description=(
            f'Você marcou "{name}" em apenas {rate:.1f}% das vezes. '
            "Tente criar um lembrete para este item."
        ),
        severity="info",
    )


# ─── Generator ─────────────────────────────────────────────

def generate_insights(
    routines: Sequence[RoutineRecord],
    moods: Sequence[MoodRecord],
    stats: ReportStatistics,
) -> List[Insight]:
    """Run every check in presentation order and keep the ones that fire."""
    candidates = [
        anxiety_duration_correlation(routines, moods),
        completion_feedback(stats),
        medication_impact(routines, moods),
        best_time(stats),
        streak_celebration(stats),
        high_anxiety_pattern(moods),
        most_neglected_item(stats),
    ]
    insights = [i for i in candidates if i is not None]
    log.debug("Generated %d insights", len(insights))
    return insights
