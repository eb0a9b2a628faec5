import datetime as dt
import unittest

from daygrid.model import Event, Interval, TimeWindow
from daygrid.select import (
    all_day_events,
    all_day_events_for_day,
    select_for_day,
    select_for_week,
    strip_events_for_day,
    strip_events_for_week,
    timed_events,
)
from daygrid.validate import InvalidInterval

# 2020-01-06 is a Monday; 00:00 UTC.
BASE = 1578268800000
M = 60000
H = 60 * M
D = 24 * H

MON = dt.date(2020, 1, 6)
TUE = dt.date(2020, 1, 7)
WED = dt.date(2020, 1, 8)
THU = dt.date(2020, 1, 9)
SUN = dt.date(2020, 1, 12)
UTC = dt.timezone.utc


def timed(eid: str, start_h: float, end_h: float, day_offset: int = 0) -> Event:
    s = BASE + day_offset * D + int(start_h * H)
    e = BASE + day_offset * D + int(end_h * H)
    return Event(id=eid, start_ms=s, end_ms=e, all_day=False)


def ids(events):
    return [e.id for e in events]


class TestSelectAllDayContract(unittest.TestCase):
    def test_all_day_interval_spanning_mon_to_wed(self) -> None:
        # Covering interval Mon 00:00 .. Thu 00:00 (exclusive end).
        ev = Event(id="conf", start_ms=BASE, end_ms=BASE + 3 * D, all_day=Interval(BASE, BASE + 3 * D))

        week = select_for_week(MON, SUN, [ev], tz=UTC)
        self.assertEqual(ids(week), ["conf"])

        self.assertEqual(ids(select_for_day(MON, [ev], tz=UTC)), ["conf"])
        self.assertEqual(ids(select_for_day(WED, [ev], tz=UTC)), ["conf"])
        self.assertEqual(select_for_day(THU, [ev], tz=UTC), [])

    def test_bare_all_day_flag_covers_whole_days(self) -> None:
        ev = Event(id="trip", start_ms=BASE + 10 * H, end_ms=BASE + 2 * D + 15 * H, all_day=True)
        self.assertEqual(ids(select_for_day(WED, [ev], tz=UTC)), ["trip"])
        self.assertEqual(select_for_day(THU, [ev], tz=UTC), [])

    def test_bare_all_day_ending_at_midnight_closes_previous_day(self) -> None:
        ev = Event(id="mon", start_ms=BASE, end_ms=BASE + D, all_day=True)
        self.assertEqual(ids(select_for_day(MON, [ev], tz=UTC)), ["mon"])
        self.assertEqual(select_for_day(TUE, [ev], tz=UTC), [])

    def test_all_day_events_ignore_hour_window(self) -> None:
        ev = Event(id="hol", start_ms=BASE, end_ms=BASE, all_day=True)
        w = TimeWindow.from_durations("PT8H", "PT20H")
        self.assertEqual(ids(select_for_day(MON, [ev], window=w, tz=UTC)), ["hol"])
        self.assertEqual(ids(all_day_events_for_day(MON, [ev, timed("x", 9, 10)], tz=UTC)), ["hol"])


class TestSelectTimedContract(unittest.TestCase):
    def test_touching_boundaries_are_excluded(self) -> None:
        w = TimeWindow.from_durations("PT8H", "PT20H")
        events = [
            timed("before_touch", 7, 8),
            timed("before_cross", 7, 8.5),
            timed("inside", 9, 10),
            timed("after_touch", 20, 21),
            timed("after_cross", 19.5, 21),
        ]
        got = select_for_day(MON, events, window=w, tz=UTC)
        self.assertEqual(ids(got), ["before_cross", "inside", "after_cross"])

    def test_zero_duration_events_use_half_open_window(self) -> None:
        w = TimeWindow.from_durations("PT8H", "PT20H")
        events = [timed("at_start", 8, 8), timed("mid", 12, 12), timed("at_end", 20, 20)]
        self.assertEqual(ids(select_for_day(MON, events, window=w, tz=UTC)), ["at_start", "mid"])

    def test_event_crossing_midnight_is_in_both_days(self) -> None:
        late = timed("late", 23, 25)  # Mon 23:00 -> Tue 01:00
        self.assertEqual(ids(select_for_day(MON, [late], tz=UTC)), ["late"])
        self.assertEqual(ids(select_for_day(TUE, [late], tz=UTC)), ["late"])
        self.assertEqual(select_for_day(WED, [late], tz=UTC), [])

    def test_event_ending_at_midnight_stays_on_its_day(self) -> None:
        ev = timed("eve", 22, 24)
        self.assertEqual(ids(select_for_day(MON, [ev], tz=UTC)), ["eve"])
        self.assertEqual(select_for_day(TUE, [ev], tz=UTC), [])

    def test_events_before_and_after_are_excluded(self) -> None:
        events = [timed("prev", 9, 10, day_offset=-1), timed("next", 9, 10, day_offset=1)]
        self.assertEqual(select_for_day(MON, events, tz=UTC), [])

    def test_input_order_is_preserved(self) -> None:
        events = [timed("c", 15, 16), timed("a", 9, 10), timed("b", 12, 13)]
        self.assertEqual(ids(select_for_day(MON, events, tz=UTC)), ["c", "a", "b"])

    def test_reversed_timed_event_raises(self) -> None:
        bad = Event(id="bad", start_ms=BASE + 10 * H, end_ms=BASE + 9 * H)
        with self.assertRaises(InvalidInterval):
            select_for_day(MON, [bad], tz=UTC)
        with self.assertRaises(InvalidInterval):
            select_for_week(MON, SUN, [bad], tz=UTC)

    def test_day_selection_respects_timezone(self) -> None:
        # 23:30 UTC Monday is 01:30 Tuesday at +02:00.
        ev = timed("x", 23.5, 23.75)
        plus2 = dt.timezone(dt.timedelta(hours=2))
        self.assertEqual(select_for_day(MON, [ev], tz=plus2), [])
        self.assertEqual(ids(select_for_day(TUE, [ev], tz=plus2)), ["x"])


class TestSelectWeekContract(unittest.TestCase):
    def test_week_boundaries(self) -> None:
        events = [
            timed("prev_sun", 22, 23, day_offset=-1),
            timed("into_mon", 23, 25, day_offset=-1),
            timed("ends_at_mon", 22, 24, day_offset=-1),
            timed("wed", 9, 10, day_offset=2),
            timed("sun_late", 23, 24, day_offset=6),
            timed("next_mon", 0, 1, day_offset=7),
        ]
        got = select_for_week(MON, SUN, events, tz=UTC)
        self.assertEqual(ids(got), ["into_mon", "wed", "sun_late"])

    def test_week_end_before_start_raises(self) -> None:
        with self.assertRaises(ValueError):
            select_for_week(SUN, MON, [], tz=UTC)

    def test_splitters(self) -> None:
        ad = Event(id="ad", start_ms=BASE, end_ms=BASE, all_day=True)
        t = timed("t", 9, 10)
        self.assertEqual(ids(timed_events([ad, t])), ["t"])
        self.assertEqual(ids(all_day_events([ad, t])), ["ad"])


class TestStripContract(unittest.TestCase):
    def test_strip_holds_all_day_and_multi_day_timed(self) -> None:
        ad = Event(id="ad", start_ms=BASE, end_ms=BASE, all_day=True)
        cross = timed("cross", 23, 25)
        normal = timed("normal", 9, 10)
        self.assertEqual(ids(strip_events_for_day(MON, [ad, cross, normal], tz=UTC)), ["ad", "cross"])
        self.assertEqual(ids(strip_events_for_day(TUE, [ad, cross, normal], tz=UTC)), ["cross"])
        self.assertEqual(ids(strip_events_for_week(MON, SUN, [ad, cross, normal], tz=UTC)), ["ad", "cross"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
