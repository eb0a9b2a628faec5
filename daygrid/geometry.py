# daygrid/geometry.py
from __future__ import annotations

import math


def round_half(x: float) -> float:
    """Round to the nearest 0.5 (ties go up).

    Every top/left/width/height and every clamped minute offset goes
    through here, so boxes that touch share the exact same edge value.
    """
    return math.floor(float(x) * 2.0 + 0.5) / 2.0


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))
