from datetime import time
from decimal import Decimal

import pytest

from timecard.attendance.state_machine import DayState, apply_event
from timecard.core.enums import ClockType
from timecard.core.exceptions import AlreadyClockedIn, AlreadyClockedOut, NotYetClockedIn


def run(*steps):
    state = DayState()
    transition = None
    for kind, at in steps:
        transition = apply_event(state, kind, at)
        state = transition.state
    return state, transition


def test_clock_out_on_empty_state_is_rejected():
    with pytest.raises(NotYetClockedIn):
        apply_event(DayState(), ClockType.CLOCK_OUT, time(18, 0))


@pytest.mark.parametrize("kind", [ClockType.BREAK_START, ClockType.BREAK_END])
def test_break_before_any_record_is_rejected(kind):
    with pytest.raises(NotYetClockedIn):
        apply_event(DayState(), kind, time(12, 0))


def test_first_clock_in_creates_record():
    transition = apply_event(DayState(), ClockType.CLOCK_IN, time(9, 0))
    assert transition.creates_record
    assert transition.state.clock_in == time(9, 0)
    assert transition.state.clock_out is None
    assert len(transition.state.events) == 1


def test_second_clock_in_rejected_and_state_unchanged():
    state, _ = run((ClockType.CLOCK_IN, time(9, 0)))
    before = state
    with pytest.raises(AlreadyClockedIn):
        apply_event(state, ClockType.CLOCK_IN, time(9, 5))
    assert state == before


def test_clock_out_twice_is_rejected():
    state, _ = run((ClockType.CLOCK_IN, time(9, 0)), (ClockType.CLOCK_OUT, time(18, 0)))
    with pytest.raises(AlreadyClockedOut):
        apply_event(state, ClockType.CLOCK_OUT, time(19, 0))


def test_clock_in_after_clock_out_is_rejected():
    state, _ = run((ClockType.CLOCK_IN, time(9, 0)), (ClockType.CLOCK_OUT, time(18, 0)))
    with pytest.raises(AlreadyClockedIn):
        apply_event(state, ClockType.CLOCK_IN, time(19, 0))


def test_clock_out_on_record_without_clock_in_is_rejected():
    with pytest.raises(NotYetClockedIn):
        apply_event(DayState(has_record=True), ClockType.CLOCK_OUT, time(18, 0))


def test_full_day_with_lunch_break():
    state, transition = run(
        (ClockType.CLOCK_IN, time(9, 0)),
        (ClockType.BREAK_START, time(12, 0)),
        (ClockType.BREAK_END, time(13, 0)),
        (ClockType.CLOCK_OUT, time(18, 0)),
    )
    assert transition.totals.break_minutes == 60
    assert transition.totals.work_hours == Decimal("8.00")
    assert [e.type for e in state.events] == [
        ClockType.CLOCK_IN,
        ClockType.BREAK_START,
        ClockType.BREAK_END,
        ClockType.CLOCK_OUT,
    ]


def test_unmatched_break_start_is_ignored_on_clock_out():
    _, transition = run(
        (ClockType.CLOCK_IN, time(9, 0)),
        (ClockType.BREAK_START, time(12, 0)),
        (ClockType.CLOCK_OUT, time(18, 0)),
    )
    assert transition.totals.break_minutes == 0
    assert transition.totals.work_hours == Decimal("9.00")


def test_clock_out_equal_to_clock_in_gives_zero_hours():
    _, transition = run((ClockType.CLOCK_IN, time(9, 0)), (ClockType.CLOCK_OUT, time(9, 0)))
    assert transition.totals.work_hours == Decimal("0.00")


def test_breaks_only_recompute_on_clock_out():
    _, transition = run((ClockType.CLOCK_IN, time(9, 0)), (ClockType.BREAK_START, time(12, 0)))
    assert transition.totals is None


def test_break_after_clock_out_is_accepted_without_recompute():
    state, transition = run(
        (ClockType.CLOCK_IN, time(9, 0)),
        (ClockType.CLOCK_OUT, time(17, 0)),
        (ClockType.BREAK_START, time(17, 30)),
    )
    assert transition.totals is None
    assert state.clock_out == time(17, 0)
    assert len(state.events) == 3
