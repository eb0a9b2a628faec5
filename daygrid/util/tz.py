# daygrid/util/tz.py
from __future__ import annotations

import datetime as dt
import re
from typing import List, Optional, Tuple, Union

from zoneinfo import ZoneInfo

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")

MIN_MS = 60_000
DAY_MS = 24 * 60 * MIN_MS

TzLike = Union[str, dt.tzinfo, None]

WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}


def normalize_tz_name(name: Optional[str]) -> str:
    """Normalize a timezone identifier.

    Supported forms:
      - None/"" -> "local"
      - "local" / "system" -> "local"
      - "UTC" / "Z" / "GMT" -> "UTC"
      - IANA names, e.g. "Europe/Bucharest"
      - Fixed offsets: "+02:00", "+0200", "-05:00"
    """
    if name is None:
        return "local"
    s = str(name).strip()
    if not s:
        return "local"

    low = s.lower()
    if low in {"local", "system", "native"}:
        return "local"
    if low in {"utc", "z", "gmt", "utc0", "utc+0"}:
        return "UTC"
    return s


def resolve_tz(name: TzLike) -> dt.tzinfo:
    """Resolve a timezone name (or pass through a tzinfo).

    Raises ValueError for invalid timezone identifiers.
    """
    if isinstance(name, dt.tzinfo):
        return name

    tz_name = normalize_tz_name(name)

    if tz_name == "UTC":
        return dt.timezone.utc

    if tz_name == "local":
        tz = dt.datetime.now().astimezone().tzinfo
        return tz or dt.timezone.utc

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh = int(hh_s)
        mm = int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        sign = 1 if sign_s == "+" else -1
        return dt.timezone(dt.timedelta(minutes=sign * (hh * 60 + mm)))

    try:
        return ZoneInfo(tz_name)
    except Exception as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def today_date(tz: dt.tzinfo) -> dt.date:
    return dt.datetime.now(tz=tz).date()


def date_from_ms(ms: int, tz: dt.tzinfo) -> dt.date:
    return dt.datetime.fromtimestamp(int(ms) / 1000.0, tz=tz).date()


def midnight_epoch_ms(d: dt.date, tz: dt.tzinfo) -> int:
    aware = dt.datetime(d.year, d.month, d.day, 0, 0, 0, tzinfo=tz)
    return int(aware.timestamp() * 1000)


def day_bounds_ms(d: dt.date, tz: dt.tzinfo) -> Tuple[int, int]:
    """[midnight of d, midnight of d+1) in tz, as epoch ms."""
    return midnight_epoch_ms(d, tz), midnight_epoch_ms(d + dt.timedelta(days=1), tz)


def is_same_day(a_ms: int, b_ms: int, tz: dt.tzinfo) -> bool:
    return date_from_ms(a_ms, tz) == date_from_ms(b_ms, tz)


def wall_clock(ms: int, tz: dt.tzinfo) -> dt.datetime:
    """Naive local time shown by a clock in tz at instant ms."""
    return dt.datetime.fromtimestamp(int(ms) / 1000.0, tz=tz).replace(tzinfo=None)


def wall_clock_epoch_ms(d: dt.date, minutes: int, tz: dt.tzinfo) -> int:
    """Instant at which the clock in tz reads `minutes` past midnight of d.

    1440 is the next day's midnight. A reading that falls in a DST gap
    resolves the way zoneinfo resolves fold=0.
    """
    days, rem = divmod(int(minutes), 24 * 60)
    hh, mm = divmod(rem, 60)
    target = d + dt.timedelta(days=days)
    aware = dt.datetime(target.year, target.month, target.day, hh, mm, tzinfo=tz)
    return int(aware.timestamp() * 1000)


def weekday_index(name: str | int) -> int:
    """Map "monday".."sunday" (or 0..6, Monday=0) to a weekday index."""
    if isinstance(name, int) and not isinstance(name, bool):
        if 0 <= name <= 6:
            return name
        raise ValueError(f"Invalid weekday index: {name!r}")
    key = str(name or "").strip().lower()
    if key not in WEEKDAYS:
        raise ValueError(f"Invalid weekday: {name!r}")
    return WEEKDAYS[key]


def start_of_week(d: dt.date, week_starts_on: int = 0) -> dt.date:
    return d - dt.timedelta(days=(d.weekday() - week_starts_on) % 7)


def week_bounds(d: dt.date, week_starts_on: int = 0) -> Tuple[dt.date, dt.date]:
    """First and last calendar day of the week containing d."""
    first = start_of_week(d, week_starts_on)
    return first, first + dt.timedelta(days=6)


def weekday_order(week_starts_on: int = 0) -> List[int]:
    """Weekday indices rotated so the configured first day leads."""
    days = list(range(7))
    return days[week_starts_on:] + days[:week_starts_on]
