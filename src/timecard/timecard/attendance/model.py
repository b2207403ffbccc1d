from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Optional

from ..core.enums import ClockType


@dataclass(frozen=True)
class ClockEvent:
    """A single clock event as seen by the state machine."""

    type: ClockType
    time: time


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per (user, date)."""

    record_id: int
    user_id: int
    work_date: date
    clock_in: Optional[time]
    clock_out: Optional[time]
    break_minutes: Optional[int] = None
    work_hours: Optional[Decimal] = None


@dataclass(frozen=True)
class AttendanceDetail:
    """Append-only log row belonging to one AttendanceRecord."""

    detail_id: int
    record_id: int
    type: ClockType
    time: time

    def as_event(self) -> ClockEvent:
        return ClockEvent(type=self.type, time=self.time)


@dataclass(frozen=True)
class WorkTotals:
    """Derived fields written on clock-out."""

    break_minutes: int
    work_hours: Decimal
