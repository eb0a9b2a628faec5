# daygrid/model.py
from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .util.duration import coerce_hours
from .util.tz import wall_clock, wall_clock_epoch_ms
from .validate import validate_window_hours


@dataclass(frozen=True)
class Interval:
    start_ms: int
    end_ms: int


@dataclass(frozen=True)
class Event:
    id: str
    start_ms: int
    end_ms: int
    # False -> timed; True or Interval -> all-day (Interval is the covering span)
    all_day: Union[bool, Interval] = False
    title: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False, repr=False)

    @property
    def is_all_day(self) -> bool:
        return self.all_day is not False

    @property
    def duration_ms(self) -> int:
        return int(self.end_ms) - int(self.start_ms)


@dataclass(frozen=True)
class WindowSpan:
    """A TimeWindow anchored to one calendar day.

    start_ms/end_ms are the instants the window opens and closes. Offsets
    inside the span are wall-clock minutes in `tz`, so an event at 09:00
    sits at the 9h mark on a DST change day too.
    """

    start_ms: int
    end_ms: int
    tz: dt.tzinfo = dt.timezone.utc
    # Clock readings at the bounds; read off start_ms/end_ms when unset.
    start_wall: Optional[dt.datetime] = None
    end_wall: Optional[dt.datetime] = None

    def _origin(self) -> dt.datetime:
        return self.start_wall or wall_clock(self.start_ms, self.tz)

    @property
    def total_minutes(self) -> float:
        end = self.end_wall or wall_clock(self.end_ms, self.tz)
        return (end - self._origin()).total_seconds() / 60.0

    def offset_minutes(self, ms: int) -> float:
        """Wall-clock minutes from the window start to `ms` (may fall outside the span)."""
        return (wall_clock(ms, self.tz) - self._origin()).total_seconds() / 60.0


@dataclass(frozen=True)
class TimeWindow:
    start_hour: float = 0.0
    end_hour: float = 24.0

    def __post_init__(self) -> None:
        validate_window_hours(float(self.start_hour), float(self.end_hour))

    @classmethod
    def from_durations(cls, start: Any = "PT0H", end: Any = "PT24H") -> "TimeWindow":
        return cls(start_hour=coerce_hours(start), end_hour=coerce_hours(end))

    @property
    def total_minutes(self) -> float:
        return (self.end_hour - self.start_hour) * 60.0

    def hours(self) -> List[int]:
        """Integer hour labels for the vertical axis."""
        return list(range(int(self.start_hour), math.ceil(self.end_hour)))

    def on_day(self, day: dt.date, tz: dt.tzinfo) -> WindowSpan:
        """Project the hour bounds onto `day`'s wall clock in `tz`."""
        start_min = int(round(self.start_hour * 60))
        end_min = int(round(self.end_hour * 60))
        midnight = dt.datetime(day.year, day.month, day.day)
        return WindowSpan(
            start_ms=wall_clock_epoch_ms(day, start_min, tz),
            end_ms=wall_clock_epoch_ms(day, end_min, tz),
            tz=tz,
            start_wall=midnight + dt.timedelta(minutes=start_min),
            end_wall=midnight + dt.timedelta(minutes=end_min),
        )


@dataclass(frozen=True)
class OverlapNode:
    children: Tuple[int, ...]
    level: int
    depth: int
    parent: Optional[int] = None


@dataclass(frozen=True)
class BoxStyle:
    top: float
    left: float
    width: float
    height: float
    position: str = "absolute"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "top": self.top,
            "left": self.left,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class LayoutBox:
    key: str
    event: Event
    style: BoxStyle
    level: Optional[int] = None
    depth: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        e = self.event
        out: Dict[str, Any] = {
            "key": self.key,
            "event": {
                "id": e.id,
                "title": e.title,
                "start_ms": e.start_ms,
                "end_ms": e.end_ms,
                "all_day": e.is_all_day,
            },
            "style": self.style.to_dict(),
        }
        if self.level is not None:
            out["level"] = self.level
        if self.depth is not None:
            out["depth"] = self.depth
        return out


@dataclass(frozen=True)
class NowIndicator:
    top: float
    left: float = 0.0
    width: float = 100.0  # percent

    def to_dict(self) -> Dict[str, Any]:
        return {"position": "absolute", "top": self.top, "left": self.left, "width": self.width}


__all__ = [
    "Interval",
    "Event",
    "TimeWindow",
    "WindowSpan",
    "OverlapNode",
    "BoxStyle",
    "LayoutBox",
    "NowIndicator",
]
