from datetime import time
from decimal import Decimal

from timecard.attendance.model import ClockEvent
from timecard.attendance.time_math import compute_totals, minutes_between, total_break_minutes
from timecard.core.enums import ClockType


def ev(kind: ClockType, hh: int, mm: int = 0, ss: int = 0) -> ClockEvent:
    return ClockEvent(type=kind, time=time(hh, mm, ss))


def test_minutes_between_whole_and_fractional():
    assert minutes_between(time(9, 0), time(18, 0)) == Decimal(540)
    assert minutes_between(time(9, 0, 0), time(9, 0, 30)) == Decimal("0.5")


def test_minutes_between_backwards_is_negative():
    assert minutes_between(time(18, 0), time(9, 0)) == Decimal(-540)


def test_break_pairs_are_summed():
    events = [
        ev(ClockType.CLOCK_IN, 9),
        ev(ClockType.BREAK_START, 12),
        ev(ClockType.BREAK_END, 13),
        ev(ClockType.BREAK_START, 15),
        ev(ClockType.BREAK_END, 15, 15),
    ]
    assert total_break_minutes(events) == Decimal(75)


def test_trailing_break_start_is_ignored():
    events = [ev(ClockType.CLOCK_IN, 9), ev(ClockType.BREAK_START, 12), ev(ClockType.CLOCK_OUT, 18)]
    assert total_break_minutes(events) == Decimal(0)


def test_break_end_without_start_is_ignored():
    events = [ev(ClockType.BREAK_END, 10), ev(ClockType.BREAK_START, 12), ev(ClockType.BREAK_END, 12, 30)]
    assert total_break_minutes(events) == Decimal(30)


def test_second_break_start_replaces_open_one():
    events = [ev(ClockType.BREAK_START, 10), ev(ClockType.BREAK_START, 11), ev(ClockType.BREAK_END, 12)]
    assert total_break_minutes(events) == Decimal(60)


def test_pairing_follows_arrival_order_not_time():
    # break-end arrives before break-start: nothing pairs.
    events = [ev(ClockType.BREAK_END, 13), ev(ClockType.BREAK_START, 12)]
    assert total_break_minutes(events) == Decimal(0)


def test_compute_totals_nine_to_six_with_lunch():
    events = [
        ev(ClockType.CLOCK_IN, 9),
        ev(ClockType.BREAK_START, 12),
        ev(ClockType.BREAK_END, 13),
        ev(ClockType.CLOCK_OUT, 18),
    ]
    totals = compute_totals(time(9, 0), time(18, 0), events)
    assert totals.break_minutes == 60
    assert totals.work_hours == Decimal("8.00")


def test_compute_totals_rounds_to_two_places():
    totals = compute_totals(time(9, 0), time(9, 20), [])
    assert totals.work_hours == Decimal("0.33")


def test_compute_totals_never_negative():
    totals = compute_totals(time(18, 0), time(9, 0), [])
    assert totals.work_hours == Decimal("0.00")
