# daygrid/util/timeparse.py
from __future__ import annotations

import datetime as dt


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s.strip(), "%Y-%m-%d").date()
