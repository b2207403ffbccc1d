from datetime import date, time

from timecard.reports.service import StatsService


def test_user_stats_month_week_total(attendance_repo):
    # 2025-03-12 is a Wednesday; its ISO week runs 03-10 .. 03-16.
    for day, hours in ((3, "6.00"), (10, "8.00"), (12, "7.50"), (16, "4.25")):
        attendance_repo.seed(user_id=1, work_date=date(2025, 3, day), clock_in=time(9, 0), work_hours=hours)
    attendance_repo.seed(user_id=1, work_date=date(2025, 2, 28), clock_in=time(9, 0), work_hours="8.00")
    attendance_repo.seed(user_id=2, work_date=date(2025, 3, 12), clock_in=time(9, 0), work_hours="8.00")

    stats = StatsService(attendance_repo).user_stats(1, today=date(2025, 3, 12))

    assert stats.to_dict() == {
        "month": {"workDays": 4, "totalHours": "25.75", "avgHours": "6.44"},
        "week": {"workDays": 3, "totalHours": "19.75"},
        "total": {"workDays": 5},
    }


def test_user_stats_without_records(attendance_repo):
    stats = StatsService(attendance_repo).user_stats(1, today=date(2025, 3, 12))
    assert stats.to_dict()["month"] == {"workDays": 0, "totalHours": "0.00", "avgHours": "0.00"}
    assert stats.total.work_days == 0
