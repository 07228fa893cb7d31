"""Text formatting shared by insight sentences and the text report."""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

import config


def format_duration(seconds: float) -> str:
    """125 -> '2min 5s', 120 -> '2min', 45 -> '45s'."""
    total = int(math.floor(abs(seconds) + 0.5))
    minutes, secs = divmod(total, 60)
    if minutes == 0:
        return f"{secs}s"
    return f"{minutes}min {secs}s" if secs > 0 else f"{minutes}min"


def format_date(value: Optional[date]) -> str:
    if value is None:
        return ""
    return value.strftime(config.REPORT_DATE_FORMAT)


def format_percent(value: float) -> str:
    return f"{value:.1f}%"
