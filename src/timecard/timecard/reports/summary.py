from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..attendance.model import AttendanceRecord


@dataclass(frozen=True)
class AttendanceSummary:
    work_days: int
    total_hours: Decimal
    avg_hours: Decimal

    def to_dict(self) -> dict:
        return {
            "workDays": self.work_days,
            "totalHours": str(self.total_hours),
            "avgHours": str(self.avg_hours),
        }


def _round(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def summarize(records: Iterable[AttendanceRecord], *, places: int = 1) -> AttendanceSummary:
    """Work days, total and average hours over already-filtered records.

    A record counts as a work day once it has a clock-in; a record without
    work hours (not clocked out yet) adds 0 to the total.
    """

    work_days = 0
    total = Decimal(0)
    for record in records:
        if record.clock_in is not None:
            work_days += 1
        total += record.work_hours or Decimal(0)

    avg = total / work_days if work_days else Decimal(0)
    return AttendanceSummary(
        work_days=work_days,
        total_hours=_round(total, places),
        avg_hours=_round(avg, places),
    )
