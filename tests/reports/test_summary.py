from datetime import date, time
from decimal import Decimal

from timecard.attendance.model import AttendanceRecord
from timecard.reports.summary import summarize


def _rec(day: int, hours, clock_in=time(9, 0)) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=day,
        user_id=1,
        work_date=date(2025, 3, day),
        clock_in=clock_in,
        clock_out=None,
        work_hours=Decimal(hours) if hours is not None else None,
    )


def test_record_without_hours_or_clock_in_is_skipped():
    summary = summarize([_rec(1, "8.00"), _rec(2, "7.50"), _rec(3, None, clock_in=None)])
    assert summary.work_days == 2
    assert summary.total_hours == Decimal("15.5")
    assert summary.avg_hours == Decimal("7.8")


def test_open_day_counts_as_work_day_with_zero_hours():
    summary = summarize([_rec(1, "8.00"), _rec(2, "7.50"), _rec(3, None)])
    assert summary.work_days == 3
    assert summary.total_hours == Decimal("15.5")
    assert summary.avg_hours == Decimal("5.2")


def test_average_rounds_half_up():
    summary = summarize([_rec(1, "8.00"), _rec(2, "7.50")])
    assert summary.work_days == 2
    assert summary.total_hours == Decimal("15.5")
    assert summary.avg_hours == Decimal("7.8")


def test_two_places_for_stats():
    summary = summarize([_rec(1, "8.00"), _rec(2, "7.50"), _rec(3, "0.33")], places=2)
    assert summary.total_hours == Decimal("15.83")
    assert summary.avg_hours == Decimal("5.28")


def test_record_without_clock_in_is_not_a_work_day():
    summary = summarize([_rec(1, None, clock_in=None)])
    assert summary.work_days == 0
    assert summary.avg_hours == Decimal("0.0")


def test_empty_set():
    assert summarize([]).to_dict() == {"workDays": 0, "totalHours": "0.0", "avgHours": "0.0"}
