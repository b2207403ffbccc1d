"""Work-hour and break-time arithmetic.

All values are times of day on one nominal day. Crossing midnight is not
handled: an end before its start simply gives a negative span.
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..core.enums import ClockType
from .model import ClockEvent, WorkTotals

_REFERENCE_DAY = date(1970, 1, 1)
_SIXTY = Decimal(60)


def minutes_between(start: time, end: time) -> Decimal:
    """Elapsed minutes from ``start`` to ``end`` (exact, may be fractional)."""

    delta = datetime.combine(_REFERENCE_DAY, end) - datetime.combine(_REFERENCE_DAY, start)
    return Decimal(int(delta.total_seconds())) / _SIXTY


def total_break_minutes(events: Iterable[ClockEvent]) -> Decimal:
    """Sum of break spans, pairing each break-start with the next break-end.

    A break-end without an open break-start is ignored, and so is a trailing
    break-start that never gets its break-end.
    """

    total = Decimal(0)
    open_start: Optional[time] = None
    for event in events:
        if event.type == ClockType.BREAK_START:
            open_start = event.time
        elif event.type == ClockType.BREAK_END and open_start is not None:
            total += minutes_between(open_start, event.time)
            open_start = None
    return total


def compute_totals(clock_in: time, clock_out: time, events: Iterable[ClockEvent]) -> WorkTotals:
    break_minutes = total_break_minutes(events)
    worked = max(Decimal(0), minutes_between(clock_in, clock_out) - break_minutes)
    return WorkTotals(
        break_minutes=int(break_minutes.quantize(Decimal(1), rounding=ROUND_HALF_UP)),
        work_hours=(worked / _SIXTY).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
    )
