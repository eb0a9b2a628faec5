# daygrid/interval.py
from __future__ import annotations

import datetime as dt

from .model import Event, Interval
from .util.tz import DAY_MS, date_from_ms, midnight_epoch_ms


def overlaps_ms(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Overlap test that ignores exactly-touching boundaries.

    A zero-length interval is a point: it overlaps [s, e) when s <= p < e,
    and another point only when both are the same instant.
    """
    a_point = a_start == a_end
    b_point = b_start == b_end
    if a_point and b_point:
        return a_start == b_start
    if a_point:
        return b_start <= a_start < b_end
    if b_point:
        return a_start <= b_start < a_end
    return a_start < b_end and b_start < a_end


def events_overlap(a: Event, b: Event) -> bool:
    return overlaps_ms(a.start_ms, a.end_ms, b.start_ms, b.end_ms)


def covering_interval(event: Event, tz: dt.tzinfo) -> Interval:
    """Span an event occupies on the calendar.

    Timed events cover [start, end]. An all-day event with an explicit
    Interval covers that interval; a bare all_day=True covers whole days,
    from midnight of the start day to midnight after the end day.
    """
    if isinstance(event.all_day, Interval):
        return event.all_day
    if event.all_day is False:
        return Interval(event.start_ms, event.end_ms)

    first = date_from_ms(event.start_ms, tz)
    last = date_from_ms(max(event.start_ms, event.end_ms), tz)
    # An end exactly at midnight closes the previous day.
    if last > first and midnight_epoch_ms(last, tz) == event.end_ms:
        last = last - dt.timedelta(days=1)
    return Interval(midnight_epoch_ms(first, tz), midnight_epoch_ms(last + dt.timedelta(days=1), tz))


def span_days(event: Event) -> int:
    """Whole days covered by the event's duration, plus one."""
    iv = event.all_day if isinstance(event.all_day, Interval) else Interval(event.start_ms, event.end_ms)
    return max(0, iv.end_ms - iv.start_ms) // DAY_MS + 1
