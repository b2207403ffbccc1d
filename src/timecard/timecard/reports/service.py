from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..attendance.filters import HistoryFilter
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, week_bounds
from .summary import AttendanceSummary, summarize


@dataclass(frozen=True)
class UserStats:
    month: AttendanceSummary
    week: AttendanceSummary
    total: AttendanceSummary

    def to_dict(self) -> dict:
        return {
            "month": self.month.to_dict(),
            "week": {
                "workDays": self.week.work_days,
                "totalHours": str(self.week.total_hours),
            },
            "total": {"workDays": self.total.work_days},
        }


class StatsService:
    """Per-user statistics for the current month, ISO week and all time."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def _summary(self, user_id: int, history_filter: HistoryFilter) -> AttendanceSummary:
        records = self._attendance.list_for_user(user_id, history_filter=history_filter)
        return summarize(records, places=2)

    def user_stats(self, user_id: int, *, today: date | None = None) -> UserStats:
        today = today or now_local().date()
        monday, sunday = week_bounds(today)
        return UserStats(
            month=self._summary(user_id, HistoryFilter.month_of_year(today.month, today.year)),
            week=self._summary(user_id, HistoryFilter.between(monday, sunday)),
            total=self._summary(user_id, HistoryFilter.all()),
        )
