"""daygrid.api

Stable *library* entrypoint for daygrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from daygrid.calendar import DayCalendar, DayPass, WeekCalendar, WeekPass, day_pass
from daygrid.config import CalendarConfig, ViewConfig, resolve_view_config
from daygrid.forest import build_forest, is_layout_sorted, sort_events
from daygrid.geometry import round_half
from daygrid.layout import (
    DAY_CELLS,
    STAIRS,
    DayCellLayout,
    LayoutRequest,
    LayoutStrategy,
    StairsLayout,
    get_strategy,
    place_events,
)
from daygrid.model import BoxStyle, Event, Interval, LayoutBox, NowIndicator, OverlapNode, TimeWindow, WindowSpan
from daygrid.normalize import normalize_event, normalize_events, parse_instant_ms
from daygrid.now import compute_now_position, is_today
from daygrid.select import (
    all_day_events_for_day,
    select_for_day,
    select_for_week,
    strip_events_for_day,
    strip_events_for_week,
)
from daygrid.util.duration import parse_duration_to_hours
from daygrid.validate import (
    InvalidDuration,
    InvalidInterval,
    InvalidWindow,
    LayoutError,
    UnsortedEvents,
    assert_valid_events,
    validate_events,
)

JsonPath = Union[str, Path]


def load_events_from_json(path: JsonPath) -> List[Event]:
    """Load events from a JSON file holding a list or {"events": [...]}.

    Raises ValueError when the document has neither shape and
    InvalidInterval for reversed timed events.
    """
    p = Path(path)
    doc = json.loads(p.read_text(encoding="utf-8", errors="replace"))
    if isinstance(doc, dict):
        doc = doc.get("events")
    if not isinstance(doc, list):
        raise ValueError("events JSON must be a list or an object with an 'events' list")
    return normalize_events(doc)


def layout_day(
    events: Sequence[Event],
    day: dt.date,
    cfg: Optional[CalendarConfig] = None,
    *,
    now: Optional[int] = None,
) -> DayPass:
    """One full day pass: select, stack, place."""
    return day_pass(day, events, resolve_view_config(cfg), now=now)


def layout_week(
    events: Sequence[Event],
    day: dt.date,
    cfg: Optional[CalendarConfig] = None,
    *,
    now: Optional[int] = None,
) -> WeekPass:
    """One full week pass for the week containing `day`."""
    return WeekCalendar(events, resolve_view_config(cfg), day=day).compute(now=now)


def layout_to_dict(result: Union[DayPass, WeekPass]) -> Dict[str, Any]:
    return result.to_dict()


__all__ = [
    # model
    "Event",
    "Interval",
    "TimeWindow",
    "WindowSpan",
    "OverlapNode",
    "BoxStyle",
    "LayoutBox",
    "NowIndicator",
    # errors
    "LayoutError",
    "InvalidInterval",
    "InvalidDuration",
    "InvalidWindow",
    "UnsortedEvents",
    "validate_events",
    "assert_valid_events",
    # selection
    "select_for_day",
    "select_for_week",
    "all_day_events_for_day",
    "strip_events_for_day",
    "strip_events_for_week",
    # forest + layout
    "sort_events",
    "is_layout_sorted",
    "build_forest",
    "place_events",
    "round_half",
    "LayoutRequest",
    "LayoutStrategy",
    "StairsLayout",
    "DayCellLayout",
    "STAIRS",
    "DAY_CELLS",
    "get_strategy",
    # now indicator
    "compute_now_position",
    "is_today",
    # config + passes
    "CalendarConfig",
    "ViewConfig",
    "resolve_view_config",
    "DayPass",
    "WeekPass",
    "DayCalendar",
    "WeekCalendar",
    "layout_day",
    "layout_week",
    "layout_to_dict",
    # ingestion
    "parse_duration_to_hours",
    "parse_instant_ms",
    "normalize_event",
    "normalize_events",
    "load_events_from_json",
]
