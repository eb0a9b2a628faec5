"""Geometric layout: turn an overlap forest into drawable boxes.

Two strategies share one boundary (LayoutStrategy):
  - StairsLayout: time grid; overlapping events cascade to the right.
  - DayCellLayout: month cells; one row per event, longest spans first.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, List, Protocol, Sequence, Tuple

from .forest import build_forest, sort_events
from .geometry import clamp, round_half
from .interval import span_days
from .model import BoxStyle, Event, LayoutBox, OverlapNode, TimeWindow, WindowSpan
from .validate import LayoutError

# A parent box is this many columns wide so its children can cascade over it.
PARENT_WIDTH_COLUMNS = 1.7


def vertical_extent(event: Event, span: WindowSpan, row_height: float) -> Tuple[float, float]:
    """(top, height) of an event inside a day span, clamped to the span.

    Measured in wall-clock minutes from the window start.
    """
    total = round_half(span.total_minutes)
    start_min = clamp(round_half(span.offset_minutes(event.start_ms)), 0.0, total)
    end_min = clamp(round_half(span.offset_minutes(event.end_ms)), start_min, total)
    top = round_half(row_height * start_min / 60.0)
    bottom = round_half(row_height * end_min / 60.0)
    return top, bottom - top


def horizontal_extent(node: OverlapNode) -> Tuple[float, float]:
    """(left, width) in percent of the column."""
    ratio = 100.0 / node.depth
    left = round_half(node.level * ratio)
    if node.children:
        width = round_half(ratio * PARENT_WIDTH_COLUMNS)
    else:
        width = 100.0 - left
    return left, width


def place_events(
    forest: Dict[int, OverlapNode],
    events: Sequence[Event],
    row_height: float,
    span: WindowSpan,
) -> List[LayoutBox]:
    """Convert each event into a LayoutBox, in input order."""
    if len(forest) != len(events):
        raise LayoutError(f"forest has {len(forest)} nodes for {len(events)} events")

    out: List[LayoutBox] = []
    for i, event in enumerate(events):
        node = forest[i]
        top, height = vertical_extent(event, span, row_height)
        left, width = horizontal_extent(node)
        out.append(
            LayoutBox(
                key=event.id,
                event=event,
                style=BoxStyle(top=top, left=left, width=width, height=height),
                level=node.level,
                depth=node.depth,
            )
        )
    return out


@dataclass(frozen=True)
class LayoutRequest:
    """Inputs shared by layout strategies for one day column."""

    day: dt.date
    tz: dt.tzinfo
    window: TimeWindow = field(default_factory=TimeWindow)
    row_height: float = 30.0
    # Per-weekday row offsets (Monday=0) for the cell layout.
    matrix: Tuple[int, ...] = (0, 0, 0, 0, 0, 0, 0)


class LayoutStrategy(Protocol):
    name: str

    def layout(self, events: Sequence[Event], req: LayoutRequest) -> List[LayoutBox]:
        """Return boxes for the timed events of one day."""


class StairsLayout:
    name = "stairs"

    def layout(self, events: Sequence[Event], req: LayoutRequest) -> List[LayoutBox]:
        ordered = sort_events(events)
        forest = build_forest(ordered)
        return place_events(forest, ordered, req.row_height, req.window.on_day(req.day, req.tz))


class DayCellLayout:
    name = "cells"

    def layout(self, events: Sequence[Event], req: LayoutRequest) -> List[LayoutBox]:
        # Multi-day events first so they line up across neighbouring cells.
        ordered = sorted(sort_events(events), key=lambda e: -span_days(e))
        weekday = req.day.weekday()
        offset = float(req.matrix[weekday]) * req.row_height
        return [
            LayoutBox(
                key=e.id,
                event=e,
                style=BoxStyle(top=offset, left=0.0, width=100.0, height=float(req.row_height), position="relative"),
            )
            for e in ordered
        ]


STAIRS = StairsLayout()
DAY_CELLS = DayCellLayout()

_STRATEGIES: Dict[str, LayoutStrategy] = {
    STAIRS.name: STAIRS,
    DAY_CELLS.name: DAY_CELLS,
}


def get_strategy(name: str) -> LayoutStrategy:
    key = str(name or "").strip().lower()
    if key not in _STRATEGIES:
        raise ValueError(f"Unknown layout strategy: {name!r} (expected one of {sorted(_STRATEGIES)})")
    return _STRATEGIES[key]


def strategy_names() -> List[str]:
    return sorted(_STRATEGIES)


__all__ = [
    "PARENT_WIDTH_COLUMNS",
    "vertical_extent",
    "horizontal_extent",
    "place_events",
    "LayoutRequest",
    "LayoutStrategy",
    "StairsLayout",
    "DayCellLayout",
    "STAIRS",
    "DAY_CELLS",
    "get_strategy",
    "strategy_names",
]
