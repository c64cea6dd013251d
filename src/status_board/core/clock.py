# src/status_board/core/clock.py

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

Clock = Callable[[], str]


def now_timestamp(utc_offset_hours: int = 9) -> str:
    """ISO-8601 with seconds and explicit offset, e.g. 2026-10-17T14:03:00+09:00."""
    tz = timezone(timedelta(hours=utc_offset_hours))
    return datetime.now(tz).isoformat(timespec="seconds")


def make_clock(utc_offset_hours: int = 9) -> Clock:
    return lambda: now_timestamp(utc_offset_hours)
