"""
Shared test configuration.

Adds src/ to sys.path so flat modules (records, constants, api, ...) and the
analytics / pipeline / routes packages import the same way they do at
runtime, and provides record factories shared by the test modules.
"""

import itertools
import os
import sys
from datetime import date, datetime, time, timedelta

import pytest

_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_src_dir = os.path.join(_project_root, "src")

if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from records import MoodRecord, RoutineRecord  # noqa: E402

# "Today" for every streak-sensitive test
REFERENCE_DAY = date(2026, 3, 10)


@pytest.fixture
def today():
    return REFERENCE_DAY


@pytest.fixture
def make_routine():
    """Factory: completed routine on `day` lasting `duration` seconds."""
    ids = itertools.count(1)

    def _make(day, duration=300, completed=True, start=time(7, 0), **flags):
        started_at = datetime.combine(day, start)
        checklist = {
            "took_shower": True,
            "got_dressed": True,
            "had_breakfast": True,
            "took_meds": True,
        }
        checklist.update(flags)
        if not completed:
            return RoutineRecord(
                id=f"r{next(ids)}",
                user_id="u1",
                started_at=started_at,
                **checklist,
            )
        return RoutineRecord(
            id=f"r{next(ids)}",
            user_id="u1",
            started_at=started_at,
            ended_at=started_at + timedelta(seconds=duration),
            duration_seconds=duration,
            completed=True,
            **checklist,
        )

    return _make


@pytest.fixture
def make_mood():
    """Factory: mood record for `day` with the given anxiety score."""
    ids = itertools.count(1)

    def _make(day, score, notes=None):
        return MoodRecord(id=f"m{next(ids)}", user_id="u1", date=day, anxiety_score=score, notes=notes)

    return _make
