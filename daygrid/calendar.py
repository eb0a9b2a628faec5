"""daygrid.calendar

Day and week layout passes: the glue between selection, forest/layout and
the now indicator. A pass is a pure function of (events, config, day, now);
the calendar objects only remember which day is being shown.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .config import CalendarConfig, ViewConfig, resolve_view_config
from .layout import LayoutRequest
from .model import BoxStyle, Event, LayoutBox, NowIndicator
from .now import compute_now_position, is_today, now_ms
from .select import (
    all_day_events_for_day,
    select_for_day,
    select_for_week,
    strip_events_for_day,
    strip_events_for_week,
    timed_events,
)
from .util.tz import is_same_day, today_date, week_bounds, weekday_order


@dataclass(frozen=True)
class DayPass:
    date: dt.date
    hours: List[int]
    boxes: List[LayoutBox]
    strip: List[LayoutBox]
    now: Optional[NowIndicator] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "hours": list(self.hours),
            "events": [b.to_dict() for b in self.boxes],
            "strip": [b.to_dict() for b in self.strip],
            "now": self.now.to_dict() if self.now is not None else None,
        }


@dataclass(frozen=True)
class WeekPass:
    week_start: dt.date
    week_end: dt.date
    days: List[DayPass]
    strip: List[LayoutBox]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week_start": self.week_start.isoformat(),
            "week_end": self.week_end.isoformat(),
            "days": [d.to_dict() for d in self.days],
            "strip": [b.to_dict() for b in self.strip],
        }


def _strip_boxes(events: Sequence[Event], row_height: float) -> List[LayoutBox]:
    return [
        LayoutBox(
            key=e.id,
            event=e,
            style=BoxStyle(top=0.0, left=0.0, width=100.0, height=float(row_height), position="relative"),
        )
        for e in events
    ]


def _crosses_midnight(e: Event, cfg: ViewConfig) -> bool:
    return not e.is_all_day and not is_same_day(e.start_ms, e.end_ms, cfg.tzinfo)


def day_pass(
    day: dt.date,
    events: Sequence[Event],
    cfg: ViewConfig,
    *,
    now: Optional[int] = None,
    viewport_height: Optional[float] = None,
) -> DayPass:
    """Run selection, layout and the now indicator for one day."""
    selected = select_for_day(day, events, cfg.window, cfg.tzinfo)
    grid = timed_events(selected)
    if cfg.multi_day_in_strip:
        grid = [e for e in grid if not _crosses_midnight(e, cfg)]
        strip = strip_events_for_day(day, events, cfg.tzinfo)
    else:
        strip = all_day_events_for_day(day, events, cfg.tzinfo)

    req = LayoutRequest(day=day, tz=cfg.tzinfo, window=cfg.window, row_height=cfg.row_height, matrix=cfg.matrix)
    boxes = cfg.strategy.layout(grid, req)

    indicator = None
    if cfg.show_now:
        t = now_ms() if now is None else int(now)
        if is_today(day, t, cfg.tzinfo):
            height = viewport_height if viewport_height is not None else cfg.row_height * cfg.window.total_minutes / 60.0
            indicator = compute_now_position(cfg.window, height, t, day, cfg.tzinfo)

    return DayPass(
        date=day,
        hours=cfg.window.hours(),
        boxes=boxes,
        strip=_strip_boxes(strip, cfg.row_height),
        now=indicator,
    )


class DayCalendar:
    """Single-day view with prev/next/today navigation."""

    def __init__(self, events: Sequence[Event], cfg: CalendarConfig | ViewConfig | None = None,
                 day: Optional[dt.date] = None) -> None:
        self.cfg = cfg if isinstance(cfg, ViewConfig) else resolve_view_config(cfg)
        self.events = list(events)
        self.current_day = day or today_date(self.cfg.tzinfo)

    @property
    def hours(self) -> List[int]:
        return self.cfg.window.hours()

    def next_day(self) -> dt.date:
        self.current_day = self.current_day + dt.timedelta(days=1)
        return self.current_day

    def prev_day(self) -> dt.date:
        self.current_day = self.current_day - dt.timedelta(days=1)
        return self.current_day

    def goto_today(self) -> dt.date:
        self.current_day = today_date(self.cfg.tzinfo)
        return self.current_day

    def compute(self, now: Optional[int] = None, viewport_height: Optional[float] = None) -> DayPass:
        return day_pass(self.current_day, self.events, self.cfg, now=now, viewport_height=viewport_height)


class WeekCalendar:
    """Week view: one DayPass per day plus a shared all-day strip."""

    def __init__(self, events: Sequence[Event], cfg: CalendarConfig | ViewConfig | None = None,
                 day: Optional[dt.date] = None) -> None:
        self.cfg = cfg if isinstance(cfg, ViewConfig) else resolve_view_config(cfg)
        self.events = list(events)
        self.current_day = day or today_date(self.cfg.tzinfo)

    @property
    def week_start(self) -> dt.date:
        return week_bounds(self.current_day, self.cfg.week_starts_on)[0]

    @property
    def week_end(self) -> dt.date:
        return week_bounds(self.current_day, self.cfg.week_starts_on)[1]

    @property
    def days(self) -> List[dt.date]:
        return [self.week_start + dt.timedelta(days=i) for i in range(7)]

    @property
    def weekdays(self) -> List[int]:
        return weekday_order(self.cfg.week_starts_on)

    def next_week(self) -> dt.date:
        self.current_day = self.current_day + dt.timedelta(days=7)
        return self.week_start

    def prev_week(self) -> dt.date:
        self.current_day = self.current_day - dt.timedelta(days=7)
        return self.week_start

    def goto_today(self) -> dt.date:
        self.current_day = today_date(self.cfg.tzinfo)
        return self.week_start

    def compute(self, now: Optional[int] = None, viewport_height: Optional[float] = None) -> WeekPass:
        start, end = self.week_start, self.week_end
        selected = select_for_week(start, end, self.events, self.cfg.tzinfo)

        days = [day_pass(d, selected, self.cfg, now=now, viewport_height=viewport_height) for d in self.days]
        if self.cfg.multi_day_in_strip:
            strip = strip_events_for_week(start, end, selected, self.cfg.tzinfo)
        else:
            strip = [e for e in selected if e.is_all_day]
        return WeekPass(week_start=start, week_end=end, days=days, strip=_strip_boxes(strip, self.cfg.row_height))


__all__ = ["DayPass", "WeekPass", "day_pass", "DayCalendar", "WeekCalendar"]
