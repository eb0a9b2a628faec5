# daygrid/normalize.py
from __future__ import annotations

import datetime as dt
import math
import re
from typing import Any, Dict, Iterable, List, Optional

from .model import Event, Interval
from .util.console import obs_warn
from .validate import InvalidInterval

COMPACT_UTC_RE = re.compile(r"^(\d{8})T(\d{6})Z$")  # e.g. 20251217T083000Z


def parse_instant_ms(value: Any) -> Optional[int]:
    """Parse an instant into epoch ms.

    Accepts epoch-ms ints, ISO-8601 strings (naive strings are UTC) and
    compact UTC stamps like 20251217T083000Z. Returns None otherwise.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    s = str(value).strip()
    if not s:
        return None

    m = COMPACT_UTC_RE.match(s)
    if m:
        try:
            d = dt.datetime.strptime(m.group(1) + m.group(2), "%Y%m%d%H%M%S")
        except ValueError:
            return None
        return int(d.replace(tzinfo=dt.timezone.utc).timestamp() * 1000)

    try:
        d = dt.datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None
    if d.tzinfo is None:
        d = d.replace(tzinfo=dt.timezone.utc)
    return int(d.timestamp() * 1000)


def _all_day_field(raw: Dict[str, Any], eid: str) -> bool | Interval:
    v = raw.get("allDay", raw.get("all_day", False))
    if isinstance(v, dict):
        start_ms = parse_instant_ms(v.get("start"))
        end_ms = parse_instant_ms(v.get("end"))
        if start_ms is None or end_ms is None:
            obs_warn("normalize", f"invalid allDay interval id={eid!r}; treating as whole days")
            return True
        if end_ms < start_ms:
            raise InvalidInterval(f"event {eid!r}: allDay interval end precedes start")
        return Interval(start_ms, end_ms)
    return bool(v)


def normalize_event(raw: Dict[str, Any]) -> Optional[Event]:
    """Build an Event from a JSON-like dict, or None when it cannot be placed.

    Raises InvalidInterval when a timed event's end precedes its start.
    """
    if not isinstance(raw, dict):
        return None

    eid = str(raw.get("id") or "").strip()
    if not eid:
        obs_warn("normalize", f"dropping event without id: {raw!r}")
        return None

    start_raw = raw.get("start")
    start_ms = parse_instant_ms(start_raw)
    if start_ms is None:
        obs_warn("normalize", f"invalid start timestamp id={eid!r} value={start_raw!r}")
        return None

    end_raw = raw.get("end")
    end_ms = parse_instant_ms(end_raw) if end_raw is not None else start_ms
    if end_ms is None:
        obs_warn("normalize", f"invalid end timestamp id={eid!r} value={end_raw!r}; using start")
        end_ms = start_ms

    all_day = _all_day_field(raw, eid)
    if all_day is False and end_ms < start_ms:
        raise InvalidInterval(f"event {eid!r}: end {end_ms} precedes start {start_ms}")

    return Event(
        id=eid,
        start_ms=int(start_ms),
        end_ms=int(end_ms),
        all_day=all_day,
        title=str(raw.get("title") or ""),
        raw=dict(raw),
    )


def normalize_events(raws: Iterable[Any]) -> List[Event]:
    out: List[Event] = []
    for raw in raws:
        e = normalize_event(raw)
        if e is not None:
            out.append(e)
    return out


__all__ = ["COMPACT_UTC_RE", "parse_instant_ms", "normalize_event", "normalize_events"]
