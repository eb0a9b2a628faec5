# daygrid/util/console.py
from __future__ import annotations

import os
import sys
from typing import Any


def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def obs_enabled() -> bool:
    v = (os.getenv("DAYGRID_OBS_LOG", "") or "").strip().lower()
    return v in {"1", "true", "yes", "on"}


def obs_warn(tag: str, msg: str) -> None:
    """Write `[daygrid.<tag>] WARN: msg` to stderr when DAYGRID_OBS_LOG is on."""
    if obs_enabled():
        eprint(f"[daygrid.{tag}] WARN: {msg}")
