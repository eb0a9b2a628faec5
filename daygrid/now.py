# daygrid/now.py
from __future__ import annotations

import datetime as dt
import math
import time
from typing import Optional

from .geometry import round_half
from .model import NowIndicator, TimeWindow
from .util.tz import TzLike, date_from_ms, resolve_tz


def now_ms() -> int:
    return int(time.time() * 1000)


def is_today(day: dt.date, now: int, tz: TzLike = "local") -> bool:
    """Gate for showing the indicator: is `day` the calendar day of `now`?"""
    return date_from_ms(now, resolve_tz(tz)) == day


def compute_now_position(
    window: TimeWindow,
    viewport_height: float,
    now: int,
    day: dt.date,
    tz: TzLike = "local",
) -> Optional[NowIndicator]:
    """Place the "now" line inside `day`'s window, or None when hidden.

    The window is half-open: exactly at end_hour the line is hidden.
    Seconds are dropped; the line moves in whole minutes.
    """
    span = window.on_day(day, resolve_tz(tz))
    if not (span.start_ms <= now < span.end_ms):
        return None
    minutes = math.floor(span.offset_minutes(now))
    return NowIndicator(top=round_half(viewport_height * minutes / span.total_minutes))
