# daygrid/config.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .layout import LayoutStrategy, get_strategy
from .model import TimeWindow
from .util.tz import normalize_tz_name, resolve_tz, weekday_index

CalendarConfig = Dict[str, Any]

DEFAULTS: CalendarConfig = {
    "start_hour": "PT0H",
    "end_hour": "PT24H",
    "row_height": 30,
    "tz": "local",
    "week_starts_on": "monday",
    "strategy": "stairs",
    "show_now": False,
    "matrix": [0, 0, 0, 0, 0, 0, 0],
    "multi_day_in_strip": False,
}


@dataclass(frozen=True)
class ViewConfig:
    window: TimeWindow = field(default_factory=TimeWindow)
    row_height: float = 30.0
    tz_name: str = "UTC"
    tzinfo: dt.tzinfo = dt.timezone.utc
    week_starts_on: int = 0
    strategy: LayoutStrategy = field(default_factory=lambda: get_strategy("stairs"))
    show_now: bool = False
    matrix: Tuple[int, ...] = (0, 0, 0, 0, 0, 0, 0)
    # Move timed events that cross midnight out of the grid into the strip.
    multi_day_in_strip: bool = False


def _coerce_matrix(v: Any) -> Tuple[int, ...]:
    if not isinstance(v, (list, tuple)) or len(v) != 7:
        raise ValueError("matrix must be a list of 7 integers (Monday first)")
    try:
        return tuple(int(x) for x in v)
    except (TypeError, ValueError) as ex:
        raise ValueError(f"matrix must be a list of 7 integers: {ex}") from ex


def resolve_view_config(cfg: CalendarConfig | None = None) -> ViewConfig:
    """Coerce a loose config dict into a ViewConfig.

    Missing or empty keys fall back to DEFAULTS. Raises InvalidDuration /
    InvalidWindow for bad hour bounds and ValueError for anything else.
    """
    merged: CalendarConfig = dict(DEFAULTS)
    for k, v in (cfg or {}).items():
        if v is not None:
            merged[k] = v

    window = TimeWindow.from_durations(merged["start_hour"], merged["end_hour"])

    try:
        row_height = float(merged["row_height"])
    except (TypeError, ValueError) as ex:
        raise ValueError(f"row_height must be a number: {merged['row_height']!r}") from ex
    if row_height <= 0:
        raise ValueError(f"row_height must be positive: {row_height!r}")

    tz_name = normalize_tz_name(merged["tz"])
    return ViewConfig(
        window=window,
        row_height=row_height,
        tz_name=tz_name,
        tzinfo=resolve_tz(tz_name),
        week_starts_on=weekday_index(merged["week_starts_on"]),
        strategy=get_strategy(merged["strategy"]),
        show_now=bool(merged["show_now"]),
        matrix=_coerce_matrix(merged["matrix"]),
        multi_day_in_strip=bool(merged["multi_day_in_strip"]),
    )


__all__ = ["CalendarConfig", "DEFAULTS", "ViewConfig", "resolve_view_config"]
