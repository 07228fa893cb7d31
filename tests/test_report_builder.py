"""
Tests for report envelope assembly.
"""
import json
from datetime import date, timedelta

from pipeline.report_builder import Report, build_report

D = date(2026, 3, 10)


def _build(routines, moods):
    return build_report(
        routines,
        moods,
        user_name="Ana",
        period_from=D - timedelta(days=6),
        period_to=D,
        reference_date=D,
        user_id="u1",
    )


class TestBuildReport:

    def test_envelope_shape(self, make_routine, make_mood):
        report = _build([make_routine(D)], [make_mood(D, 4)])
        out = report.to_dict()
        assert set(out) == {"userId", "userName", "period", "statistics", "insights", "charts"}
        assert out["userName"] == "Ana"
        assert out["period"] == {"from": "2026-03-04", "to": "2026-03-10"}
        assert out["statistics"]["totalMorningRoutines"] == 1
        assert out["charts"]["anxietyOverTime"] == [{"date": "2026-03-10", "value": 4}]

    def test_is_json_serialisable(self, make_routine, make_mood):
        report = _build(
            [make_routine(D - timedelta(days=i), duration=200 + i) for i in range(5)],
            [make_mood(D - timedelta(days=i), i + 3) for i in range(5)],
        )
        text = json.dumps(report.to_dict(), ensure_ascii=False)
        assert json.loads(text)["statistics"]["currentStreak"] == 5

    def test_empty_period(self):
        out = _build([], []).to_dict()
        assert out["insights"] == []
        assert out["statistics"]["bestTime"] is None
        assert out["statistics"]["completionRate"] == 0

    def test_identical_inputs_give_identical_output(self, make_routine, make_mood):
        routines = [make_routine(D - timedelta(days=i), duration=100 * (i + 1), took_meds=i % 2 == 0) for i in range(9)]
        moods = [make_mood(D - timedelta(days=i), (i * 3) % 11) for i in range(9)]
        first = json.dumps(_build(routines, moods).to_dict(), sort_keys=True)
        second = json.dumps(_build(routines, moods).to_dict(), sort_keys=True)
        assert first == second

    def test_returns_report_value(self, make_routine):
        report = _build([make_routine(D)], [])
        assert isinstance(report, Report)
        assert report.statistics.completed_morning_routines == 1
