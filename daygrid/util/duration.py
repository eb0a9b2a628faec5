# daygrid/util/duration.py
from __future__ import annotations

import re

from daygrid.validate import InvalidDuration

# Window bounds are ISO-8601 time durations: PT0H, PT24H, PT8H30M, PT0.5H.
_ISO_RE = re.compile(
    r"^PT(?:(\d+(?:\.\d+)?)H)?(?:(\d+(?:\.\d+)?)M)?(?:(\d+(?:\.\d+)?)S)?$",
    re.IGNORECASE,
)


def parse_duration_to_hours(s: str | None) -> float:
    """Parse an ISO-8601 duration into fractional hours.

    "PT0H" -> 0.0, "PT24H" -> 24.0, "PT8H30M" -> 8.5.
    Raises InvalidDuration when the string is not a time duration.
    """
    if s is None:
        raise InvalidDuration("duration is missing")
    ss = str(s).strip()
    m = _ISO_RE.match(ss)
    # "PT" alone matches the regex with every group empty.
    if not m or not any(m.groups()):
        raise InvalidDuration(f"Invalid duration: {s!r}")

    h = float(m.group(1) or 0)
    mn = float(m.group(2) or 0)
    sec = float(m.group(3) or 0)
    return h + mn / 60.0 + sec / 3600.0


def coerce_hours(v: object) -> float:
    """Accept either a duration string or a plain number of hours."""
    if isinstance(v, bool):
        raise InvalidDuration(f"Invalid duration: {v!r}")
    if isinstance(v, (int, float)):
        return float(v)
    if not isinstance(v, str):
        raise InvalidDuration(f"Invalid duration: {v!r}")
    return parse_duration_to_hours(v)
