"""
FastAPI backend contract for the reports page.

Route handlers are defined here; shared utilities live in routes/helpers.py.
Records arrive already filtered to the requested period; this service keeps
no state between requests.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

import config
from pipeline.report_builder import Report
from pipeline.summary_builder import build_text_report
from records import RecordValidationError
from routes.helpers import _build_report_from_rows, _check_period

log = logging.getLogger("api")


# ─── App setup ─────────────────────────────────────────────

app = FastAPI(title="Morning Routine Insights API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.FRONTEND_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


class ReportRequest(BaseModel):
    userName: str
    userId: Optional[str] = None
    dateFrom: date
    dateTo: date
    referenceDate: Optional[date] = None
    routines: List[Dict[str, Any]] = []
    moods: List[Dict[str, Any]] = []


def _report_or_http_error(req: ReportRequest) -> Report:
    problem = _check_period(req.dateFrom, req.dateTo)
    if problem:
        raise HTTPException(status_code=400, detail=problem)
    try:
        return _build_report_from_rows(
            req.routines,
            req.moods,
            user_name=req.userName,
            period=(req.dateFrom, req.dateTo),
            reference_date=req.referenceDate,
            user_id=req.userId,
        )
    except RecordValidationError as e:
        log.warning("Rejected report request: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        log.exception("Report generation failed")
        raise HTTPException(status_code=500, detail=str(e))


# ─── Routes ────────────────────────────────────────────────

@app.get("/")
def root() -> Dict[str, Any]:
    return {"service": "morning-routine-insights-api", "status": "ok"}


@app.get("/health-check")
def health_check() -> JSONResponse:
    return JSONResponse({"status": "Online", "message": "Online"})


@app.post("/api/v1/reports/summary")
def report_summary(req: ReportRequest) -> Dict[str, Any]:
    report = _report_or_http_error(req)
    return {"success": True, "data": report.to_dict()}


@app.post("/api/v1/reports/summary/text")
def report_summary_text(req: ReportRequest) -> Dict[str, Any]:
    report = _report_or_http_error(req)
    return {"success": True, "text": build_text_report(report.to_dict())}
