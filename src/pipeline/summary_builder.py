"""Helpers for rendering a report envelope as plain text (CLI, email body)."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from analytics.formatting import format_date, format_duration

# Number of most recent chart points listed per series
CHART_TAIL = 10


def _as_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    text = str(value)
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text.replace("Z", "+00:00"))


def build_text_report(report: Dict[str, Any], generated_at: Optional[datetime] = None) -> str:
    """Render the {statistics, insights, charts} envelope section by section."""
    stats = report.get("statistics") or {}
    insights = report.get("insights") or []
    charts = report.get("charts") or {}
    period = report.get("period") or {}

    lines: List[str] = []

    def heading(text: str, rule: str = "=") -> None:
        lines.append(text)
        lines.append(rule * len(text))

    def bullet(text: str) -> None:
        lines.append(f"  • {text}")

    def when(value: Any) -> str:
        return format_date(_as_date(value))

    heading("NeuroApp - Relatório Clínico")
    lines.append(f"Usuário: {report.get('userName') or ''}")
    lines.append("")
    lines.append("Período do Relatório:")
    lines.append(f"De {when(period.get('from'))} até {when(period.get('to'))}")
    lines.append("")

    heading("Estatísticas")
    lines.append("Rotina da Manhã:")
    bullet(f"Total de rotinas: {stats.get('totalMorningRoutines', 0)}")
    bullet(f"Rotinas completadas: {stats.get('completedMorningRoutines', 0)}")
    bullet(f"Taxa de conclusão: {stats.get('completionRate', 0):.1f}%")
    bullet(f"Duração média: {format_duration(stats.get('averageDuration', 0))}")
    if stats.get("bestTime") is not None:
        bullet(f"Melhor tempo: {format_duration(stats['bestTime'])} ({when(stats.get('bestTimeDate'))})")
    if stats.get("currentStreak", 0) > 0:
        bullet(f"Sequência atual: {stats['currentStreak']} dias consecutivos")
    if stats.get("longestStreak", 0) > 0:
        bullet(f"Maior sequência: {stats['longestStreak']} dias")
    lines.append("")

    lines.append("Ansiedade:")
    bullet(f"Média do período: {stats.get('averageAnxiety', 0):.1f}/10")
    if stats.get("lowestAnxiety") is not None:
        bullet(f"Menor ansiedade: {stats['lowestAnxiety']}/10 ({when(stats.get('lowestAnxietyDate'))})")
    if stats.get("highestAnxiety") is not None:
        bullet(f"Maior ansiedade: {stats['highestAnxiety']}/10 ({when(stats.get('highestAnxietyDate'))})")
    lines.append("")

    lines.append("Taxa de Conclusão do Checklist:")
    bullet(f"Banho: {stats.get('showerCompletionRate', 0):.1f}%")
    bullet(f"Vestir: {stats.get('dressedCompletionRate', 0):.1f}%")
    bullet(f"Café da manhã: {stats.get('breakfastCompletionRate', 0):.1f}%")
    bullet(f"Remédios: {stats.get('medsCompletionRate', 0):.1f}%")
    lines.append("")

    if insights:
        heading("Insights e Conclusões")
        lines.append("(Gerados automaticamente por análise determinística, sem uso de IA)")
        for idx, insight in enumerate(insights, start=1):
            lines.append(f"{idx}. {insight.get('title', '')}")
            lines.append(f"   {insight.get('description', '')}")
        lines.append("")

    heading("Dados dos Gráficos")
    anxiety = charts.get("anxietyOverTime") or []
    if anxiety:
        lines.append("Ansiedade ao Longo do Tempo:")
        for point in anxiety[-CHART_TAIL:]:
            bullet(f"{when(point['date'])}: {point['value']}/10")
        lines.append("")

    durations = charts.get("durationOverTime") or []
    if durations:
        lines.append("Duração da Rotina ao Longo do Tempo:")
        for point in durations[-CHART_TAIL:]:
            bullet(f"{when(point['date'])}: {point['value']:.1f} minutos")
        lines.append("")

    checklist = charts.get("checklistCompletion") or {}
    lines.append("Taxa de Conclusão do Checklist:")
    for label, value in zip(checklist.get("labels", []), checklist.get("values", [])):
        bullet(f"{label}: {value:.1f}%")

    if generated_at is not None:
        lines.append("")
        lines.append(f"Gerado pelo NeuroApp em {generated_at.strftime('%d/%m/%Y %H:%M:%S')}")

    return "\n".join(lines) + "\n"
