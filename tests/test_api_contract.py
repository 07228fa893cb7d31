"""
Contract/behavior tests for src/api.py.

Route functions are called directly with request models and validate:
- summary envelope structure
- ingestion errors mapped to HTTP 422
- inverted periods mapped to HTTP 400
- text rendering endpoint
"""
from datetime import date

import pytest
from fastapi import HTTPException

import api as api_mod
import routes.helpers as helpers_mod


def _request(**overrides):
    body = {
        "userName": "Ana",
        "userId": "u1",
        "dateFrom": "2026-03-01",
        "dateTo": "2026-03-10",
        "referenceDate": "2026-03-10",
        "routines": [
            {
                "id": f"r{d}",
                "startedAt": f"2026-03-{d:02d}T07:00:00",
                "endedAt": f"2026-03-{d:02d}T07:0{d % 5}:00",
                "tookShower": True,
                "gotDressed": True,
                "hadBreakfast": True,
                "tookMeds": d % 2 == 0,
                "completed": True,
            }
            for d in range(4, 11)
        ],
        "moods": [
            {"id": f"m{d}", "date": f"2026-03-{d:02d}", "anxietyScore": d % 11}
            for d in range(1, 11)
        ],
    }
    body.update(overrides)
    return api_mod.ReportRequest(**body)


def test_root_and_health_check():
    assert api_mod.root()["status"] == "ok"
    assert api_mod.health_check().status_code == 200


def test_summary_returns_envelope():
    out = api_mod.report_summary(_request())
    assert out["success"] is True
    data = out["data"]
    assert data["userName"] == "Ana"
    assert data["period"] == {"from": "2026-03-01", "to": "2026-03-10"}
    assert data["statistics"]["totalMorningRoutines"] == 7
    assert data["statistics"]["currentStreak"] == 7
    assert data["charts"]["checklistCompletion"]["labels"] == ["Banho", "Vestir", "Café", "Remédios"]
    titles = [i["title"] for i in data["insights"]]
    assert "Sequência incrível!" in titles


def test_summary_defaults_reference_date_to_today(monkeypatch):
    monkeypatch.setattr(helpers_mod, "_today", lambda: date(2026, 3, 20))
    out = api_mod.report_summary(_request(referenceDate=None))
    assert out["data"]["statistics"]["currentStreak"] == 0
    assert out["data"]["statistics"]["longestStreak"] == 7


def test_invalid_mood_is_422():
    bad = _request(moods=[{"date": "2026-03-05", "anxietyScore": 14}])
    with pytest.raises(HTTPException) as exc:
        api_mod.report_summary(bad)
    assert exc.value.status_code == 422
    assert "anxietyScore" in exc.value.detail


def test_completed_routine_without_end_is_422():
    bad = _request(routines=[{"startedAt": "2026-03-05T07:00:00", "completed": True}])
    with pytest.raises(HTTPException) as exc:
        api_mod.report_summary(bad)
    assert exc.value.status_code == 422


def test_inverted_period_is_400():
    with pytest.raises(HTTPException) as exc:
        api_mod.report_summary(_request(dateFrom="2026-03-11"))
    assert exc.value.status_code == 400


def test_unexpected_failure_is_500(monkeypatch):
    def boom(*_a, **_k):
        raise RuntimeError("engine down")

    monkeypatch.setattr(api_mod, "_build_report_from_rows", boom)
    with pytest.raises(HTTPException) as exc:
        api_mod.report_summary(_request())
    assert exc.value.status_code == 500


def test_text_endpoint():
    out = api_mod.report_summary_text(_request())
    assert out["success"] is True
    assert "Usuário: Ana" in out["text"]
    assert "Insights e Conclusões" in out["text"]
