from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore

from .api import load_events_from_json
from .calendar import DayCalendar, WeekCalendar
from .config import resolve_view_config
from .layout import strategy_names
from .util.console import eprint
from .util.timeparse import parse_date_yyyy_mm_dd
from .util.tz import WEEKDAYS
from .validate import LayoutError


def _die(msg: str, rc: int = 2) -> int:
    eprint(f"[daygrid] ERROR: {msg}")
    return rc


def dumps_layout(doc: Dict[str, Any], *, pretty: bool = False) -> str:
    if orjson is not None:
        opt = orjson.OPT_INDENT_2 if pretty else 0
        return orjson.dumps(doc, option=opt).decode("utf-8")
    if pretty:
        return json.dumps(doc, ensure_ascii=False, indent=2)
    return json.dumps(doc, ensure_ascii=False, separators=(",", ":"))


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="daygrid",
        description="Lay out calendar events for one day or week and print box geometry as JSON.",
    )
    ap.add_argument("--events", required=True, help="Events JSON: a list, or an object with an 'events' list")
    ap.add_argument("--day", default=None, help="Day YYYY-MM-DD (default: today in --tz)")
    ap.add_argument("--view", choices=("day", "week"), default="day", help="Pass to run (default: day)")
    ap.add_argument("--start-hour", default="PT0H", help="Window start as ISO-8601 duration (default: PT0H)")
    ap.add_argument("--end-hour", default="PT24H", help="Window end as ISO-8601 duration (default: PT24H)")
    ap.add_argument("--row-height", type=float, default=30.0, help="Pixels per hour row (default: 30)")
    ap.add_argument("--strategy", choices=strategy_names(), default="stairs", help="Layout strategy (default: stairs)")
    ap.add_argument(
        "--tz",
        default=os.getenv("DAYGRID_TZ", "local"),
        help="Timezone for day boundaries (default: env DAYGRID_TZ or 'local')",
    )
    ap.add_argument("--week-starts-on", choices=sorted(WEEKDAYS), default="monday", help="First day of week")
    ap.add_argument("--multi-day-in-strip", action="store_true", help="Show events crossing midnight in the strip only")
    ap.add_argument("--show-now", action="store_true", help="Include the now indicator when the day is today")
    ap.add_argument("--now-ms", type=int, default=None, help="Override the current instant (epoch ms)")
    ap.add_argument("--out", default=None, help="Output JSON path (default: stdout)")
    ap.add_argument("--pretty", action="store_true", help="Pretty JSON output")
    ns = ap.parse_args(argv)

    cfg = {
        "start_hour": ns.start_hour,
        "end_hour": ns.end_hour,
        "row_height": ns.row_height,
        "tz": ns.tz,
        "week_starts_on": ns.week_starts_on,
        "strategy": ns.strategy,
        "show_now": ns.show_now,
        "multi_day_in_strip": ns.multi_day_in_strip,
    }
    try:
        view_cfg = resolve_view_config(cfg)
    except ValueError as e:
        return _die(f"Invalid configuration: {e}")

    day = None
    if ns.day:
        try:
            day = parse_date_yyyy_mm_dd(ns.day)
        except ValueError as e:
            return _die(f"Invalid --day value: {e}")

    p = Path(ns.events)
    if not p.exists():
        return _die(f"Missing events file: {p}")
    try:
        events = load_events_from_json(p)
    except LayoutError as e:
        return _die(f"Invalid event: {e}", rc=3)
    except ValueError as e:
        return _die(f"Failed to parse events JSON: {p} ({e})")

    try:
        if ns.view == "week":
            result = WeekCalendar(events, view_cfg, day=day).compute(now=ns.now_ms)
        else:
            result = DayCalendar(events, view_cfg, day=day).compute(now=ns.now_ms)
    except LayoutError as e:
        return _die(f"Layout failed: {e}", rc=3)

    txt = dumps_layout(result.to_dict(), pretty=ns.pretty)
    if ns.out:
        out_path = Path(ns.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(txt + "\n", encoding="utf-8", newline="\n")
        print(f"[daygrid] OK: wrote {out_path}")
    else:
        print(txt)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
