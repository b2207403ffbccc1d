from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import ClockType
from .filters import HistoryFilter
from .model import AttendanceDetail, AttendanceRecord


class AttendanceStore(Protocol):
    """Write primitives available inside one transaction."""

    def find_record(self, user_id: int, work_date: date, *, for_update: bool = False) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_record(self, *, user_id: int, work_date: date, clock_in: time) -> int:
        """Insert the day record; raises AlreadyClockedIn if one already exists."""

        raise NotImplementedError

    def update_record(
        self,
        record_id: int,
        *,
        clock_in: Optional[time] = None,
        clock_out: Optional[time] = None,
        break_minutes: Optional[int] = None,
        work_hours: Optional[Decimal] = None,
    ) -> None:
        """Write the given non-None fields."""

        raise NotImplementedError

    def append_detail(self, record_id: int, clock_type: ClockType, at: time) -> int:
        raise NotImplementedError

    def list_details(self, record_id: int) -> Sequence[AttendanceDetail]:
        """Details in arrival order."""

        raise NotImplementedError


class AttendanceRepository(Protocol):
    """Repository interface for attendance records and their detail logs.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def transaction(self) -> ContextManager[AttendanceStore]:
        """All-or-nothing unit: commit on normal exit, roll back on exception."""

        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_details(self, record_id: int) -> Sequence[AttendanceDetail]:
        """Details ordered by time of day, for display."""

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        history_filter: HistoryFilter,
        limit: Optional[int] = None,
        offset: int = 0,
        newest_first: bool = True,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_for_user(self, user_id: int, *, history_filter: HistoryFilter) -> int:
        raise NotImplementedError
