"""Layout errors and event validation helpers (library-facing)."""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple


class LayoutError(ValueError):
    """Base class for errors that abort a layout pass."""


class InvalidInterval(LayoutError):
    """Raised when a timed event ends before it starts."""


class InvalidDuration(LayoutError):
    """Raised when a window bound does not parse to fractional hours."""


class InvalidWindow(LayoutError):
    """Raised when window bounds are out of order or outside 0..24h."""


class UnsortedEvents(LayoutError):
    """Raised when the forest builder gets events out of layout order."""


def validate_window_hours(start_hour: float, end_hour: float) -> None:
    if not (0.0 <= start_hour < end_hour <= 24.0):
        raise InvalidWindow(
            f"window must satisfy 0 <= start_hour < end_hour <= 24 (got {start_hour!r}..{end_hour!r})"
        )


def _problems(events: Sequence[Any]) -> List[Tuple[str, bool]]:
    """(message, reversed_interval) for every problem found."""
    out: List[Tuple[str, bool]] = []
    for i, e in enumerate(events):
        eid = getattr(e, "id", None)
        if not isinstance(eid, str) or not eid:
            out.append((f"events[{i}].id must be non-empty string", False))
        start_ms = getattr(e, "start_ms", None)
        end_ms = getattr(e, "end_ms", None)
        if not isinstance(start_ms, int) or not isinstance(end_ms, int):
            out.append((f"events[{i}] start_ms/end_ms must be int", False))
            continue
        if getattr(e, "all_day", False) is False and end_ms < start_ms:
            out.append((f"events[{i}] ({eid}): end {end_ms} precedes start {start_ms}", True))
    return out


def validate_events(events: Sequence[Any]) -> List[str]:
    """Return a list of human-readable problems (empty when valid)."""
    return [msg for msg, _ in _problems(events)]


def assert_valid_events(events: Sequence[Any]) -> None:
    """Raise InvalidInterval for reversed timed events; LayoutError for anything else."""
    problems = _problems(events)
    for msg, reversed_interval in problems:
        if reversed_interval:
            raise InvalidInterval(msg)
    if problems:
        raise LayoutError("; ".join(msg for msg, _ in problems))


__all__ = [
    "LayoutError",
    "InvalidInterval",
    "InvalidDuration",
    "InvalidWindow",
    "UnsortedEvents",
    "validate_window_hours",
    "validate_events",
    "assert_valid_events",
]
