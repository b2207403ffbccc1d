from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import time
from typing import Optional

from ..core.enums import ClockType
from ..core.exceptions import AlreadyClockedIn, AlreadyClockedOut, NotYetClockedIn
from .model import ClockEvent, WorkTotals
from .time_math import compute_totals


@dataclass(frozen=True)
class DayState:
    """Attendance state of one user on one date."""

    clock_in: Optional[time] = None
    clock_out: Optional[time] = None
    events: tuple[ClockEvent, ...] = field(default_factory=tuple)
    has_record: bool = False


@dataclass(frozen=True)
class Transition:
    state: DayState
    event: ClockEvent
    creates_record: bool = False
    totals: Optional[WorkTotals] = None


def apply_event(state: DayState, clock_type: ClockType, at: time) -> Transition:
    """Validate a clock event against ``state`` and return the next state.

    Raises a StateConflict subclass when the event is not allowed; ``state``
    itself is never modified.
    """

    event = ClockEvent(type=clock_type, time=at)
    events = state.events + (event,)

    if not state.has_record:
        # The day record only comes into existence with a clock-in.
        if clock_type != ClockType.CLOCK_IN:
            raise NotYetClockedIn("Clock-in is required first")
        return Transition(
            state=DayState(clock_in=at, events=events, has_record=True),
            event=event,
            creates_record=True,
        )

    if clock_type == ClockType.CLOCK_IN:
        if state.clock_in is not None:
            raise AlreadyClockedIn("Already clocked in today")
        return Transition(state=replace(state, clock_in=at, events=events), event=event)

    if clock_type == ClockType.CLOCK_OUT:
        if state.clock_in is None:
            raise NotYetClockedIn("Clock-in is required first")
        if state.clock_out is not None:
            raise AlreadyClockedOut("Already clocked out today")
        totals = compute_totals(state.clock_in, at, events)
        return Transition(
            state=replace(state, clock_out=at, events=events),
            event=event,
            totals=totals,
        )

    return Transition(state=replace(state, events=events), event=event)
