"""daygrid.select

Time-window selection: narrow the full event set down to what one day or
one week has to render.

Rules shared by every selector:
  - Overlap ignores exactly-touching boundaries (an event ending at 09:00
    does not belong to a window starting at 09:00).
  - Zero-duration events count when their instant is inside [start, end).
  - Input order is preserved; the forest builder sorts later.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional, Sequence

from .interval import covering_interval, overlaps_ms
from .model import Event, TimeWindow
from .util.tz import TzLike, day_bounds_ms, is_same_day, midnight_epoch_ms, resolve_tz
from .validate import InvalidInterval


def timed_events(events: Iterable[Event]) -> List[Event]:
    return [e for e in events if not e.is_all_day]


def all_day_events(events: Iterable[Event]) -> List[Event]:
    return [e for e in events if e.is_all_day]


def _check_timed(e: Event) -> None:
    if e.end_ms < e.start_ms:
        raise InvalidInterval(f"event {e.id!r}: end {e.end_ms} precedes start {e.start_ms}")


def _all_day_hits(e: Event, start_ms: int, end_ms: int, tzinfo: dt.tzinfo) -> bool:
    iv = covering_interval(e, tzinfo)
    return overlaps_ms(iv.start_ms, iv.end_ms, start_ms, end_ms)


def _select(events: Sequence[Event], *, start_ms: int, end_ms: int,
            timed_start_ms: int, timed_end_ms: int, tzinfo: dt.tzinfo) -> List[Event]:
    out: List[Event] = []
    for e in events:
        if e.is_all_day:
            if _all_day_hits(e, start_ms, end_ms, tzinfo):
                out.append(e)
            continue
        _check_timed(e)
        if overlaps_ms(e.start_ms, e.end_ms, timed_start_ms, timed_end_ms):
            out.append(e)
    return out


def select_for_day(
    day: dt.date,
    events: Sequence[Event],
    window: Optional[TimeWindow] = None,
    tz: TzLike = "local",
) -> List[Event]:
    """Events relevant to one day.

    All-day events are tested against the whole calendar day; timed events
    against the window's hour bounds projected onto that day. Raises
    InvalidInterval for a timed event whose end precedes its start.
    """
    tzinfo = resolve_tz(tz)
    span = (window or TimeWindow()).on_day(day, tzinfo)
    day_start, day_end = day_bounds_ms(day, tzinfo)
    return _select(
        events,
        start_ms=day_start,
        end_ms=day_end,
        timed_start_ms=span.start_ms,
        timed_end_ms=span.end_ms,
        tzinfo=tzinfo,
    )


def select_for_week(
    week_start: dt.date,
    week_end: dt.date,
    events: Sequence[Event],
    tz: TzLike = "local",
) -> List[Event]:
    """Events relevant to the calendar days week_start..week_end (inclusive)."""
    if week_end < week_start:
        raise ValueError(f"week_end {week_end} precedes week_start {week_start}")
    tzinfo = resolve_tz(tz)
    start_ms = midnight_epoch_ms(week_start, tzinfo)
    end_ms = midnight_epoch_ms(week_end + dt.timedelta(days=1), tzinfo)
    return _select(
        events,
        start_ms=start_ms,
        end_ms=end_ms,
        timed_start_ms=start_ms,
        timed_end_ms=end_ms,
        tzinfo=tzinfo,
    )


def all_day_events_for_day(
    day: dt.date,
    events: Sequence[Event],
    tz: TzLike = "local",
) -> List[Event]:
    tzinfo = resolve_tz(tz)
    day_start, day_end = day_bounds_ms(day, tzinfo)
    return [e for e in events if e.is_all_day and _all_day_hits(e, day_start, day_end, tzinfo)]


def _strip(events: Sequence[Event], start_ms: int, end_ms: int, tzinfo: dt.tzinfo) -> List[Event]:
    out: List[Event] = []
    for e in events:
        if e.is_all_day:
            if _all_day_hits(e, start_ms, end_ms, tzinfo):
                out.append(e)
            continue
        _check_timed(e)
        # Timed events only join the strip when they cross a day boundary.
        if is_same_day(e.start_ms, e.end_ms, tzinfo):
            continue
        if overlaps_ms(e.start_ms, e.end_ms, start_ms, end_ms):
            out.append(e)
    return out


def strip_events_for_day(
    day: dt.date,
    events: Sequence[Event],
    tz: TzLike = "local",
) -> List[Event]:
    """Banner row of a day: all-day events plus multi-day timed events."""
    tzinfo = resolve_tz(tz)
    day_start, day_end = day_bounds_ms(day, tzinfo)
    return _strip(events, day_start, day_end, tzinfo)


def strip_events_for_week(
    week_start: dt.date,
    week_end: dt.date,
    events: Sequence[Event],
    tz: TzLike = "local",
) -> List[Event]:
    tzinfo = resolve_tz(tz)
    start_ms = midnight_epoch_ms(week_start, tzinfo)
    end_ms = midnight_epoch_ms(week_end + dt.timedelta(days=1), tzinfo)
    return _strip(events, start_ms, end_ms, tzinfo)


__all__ = [
    "timed_events",
    "all_day_events",
    "select_for_day",
    "select_for_week",
    "all_day_events_for_day",
    "strip_events_for_day",
    "strip_events_for_week",
]
