from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import format_time, now_local
from ..core.enums import ClockType, WorkStatus
from ..core.exceptions import NotFound
from ..reports.summary import AttendanceSummary, summarize
from .export import export_filename, record_to_row, render_csv
from .filters import HistoryFilter
from .model import AttendanceDetail, AttendanceRecord, ClockEvent
from .repository import AttendanceRepository
from .schemas import ClockRequest, HistoryQuery
from .state_machine import DayState, apply_event

logger = logging.getLogger(__name__)

_STATUS_AFTER = {
    ClockType.CLOCK_IN: WorkStatus.WORKING,
    ClockType.BREAK_END: WorkStatus.WORKING,
    ClockType.BREAK_START: WorkStatus.ON_BREAK,
    ClockType.CLOCK_OUT: WorkStatus.FINISHED,
}


@dataclass(frozen=True)
class ClockResult:
    record: AttendanceRecord
    event: ClockEvent


@dataclass(frozen=True)
class TodayView:
    record: Optional[AttendanceRecord]
    details: Sequence[AttendanceDetail]
    status: WorkStatus

    def to_dict(self) -> dict:
        return {
            "details": [detail_to_dict(d) for d in self.details],
            "summary": {
                "clockIn": format_time(self.record.clock_in) if self.record else None,
                "clockOut": format_time(self.record.clock_out) if self.record else None,
                "status": self.status.value,
            },
        }


@dataclass(frozen=True)
class HistoryPage:
    records: Sequence[AttendanceRecord]
    summary: AttendanceSummary
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self) -> dict:
        return {
            "records": [record_to_row(r) for r in self.records],
            "summary": self.summary.to_dict(),
            "pagination": {
                "page": self.page,
                "limit": self.limit,
                "total": self.total,
                "totalPages": self.total_pages,
            },
        }


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: bytes


def detail_to_dict(detail: AttendanceDetail) -> dict:
    return {"type": detail.type.value, "time": format_time(detail.time)}


def status_from_details(record: Optional[AttendanceRecord], details: Sequence[AttendanceDetail]) -> WorkStatus:
    if record is None:
        return WorkStatus.NOT_STARTED
    if not details:
        return WorkStatus.OFF_DUTY
    return _STATUS_AFTER[details[-1].type]


class AttendanceService:
    """Use cases: clock events, today's view, history and export."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def clock(self, user_id: int, request: ClockRequest, *, now: datetime | None = None) -> ClockResult:
        """Apply one clock event for today as a single transaction.

        Any rejection or store error rolls back the whole unit, so a rejected
        event never leaves a detail row behind.
        """

        today = (now or now_local()).date()

        with self._attendance.transaction() as store:
            record = store.find_record(user_id, today, for_update=True)
            details = store.list_details(record.record_id) if record else []
            state = DayState(
                clock_in=record.clock_in if record else None,
                clock_out=record.clock_out if record else None,
                events=tuple(d.as_event() for d in details),
                has_record=record is not None,
            )

            transition = apply_event(state, request.type, request.time)

            if transition.creates_record:
                record_id = store.create_record(user_id=user_id, work_date=today, clock_in=request.time)
            else:
                record_id = record.record_id
                if request.type == ClockType.CLOCK_IN:
                    store.update_record(record_id, clock_in=request.time)

            store.append_detail(record_id, request.type, request.time)

            if transition.totals is not None:
                store.update_record(
                    record_id,
                    clock_out=request.time,
                    break_minutes=transition.totals.break_minutes,
                    work_hours=transition.totals.work_hours,
                )

        logger.info(
            "Clock event %s at %s recorded for user %s on %s",
            request.type.value,
            format_time(request.time),
            user_id,
            today,
        )

        new_state = transition.state
        return ClockResult(
            record=AttendanceRecord(
                record_id=record_id,
                user_id=user_id,
                work_date=today,
                clock_in=new_state.clock_in,
                clock_out=new_state.clock_out,
                break_minutes=transition.totals.break_minutes if transition.totals else (record.break_minutes if record else None),
                work_hours=transition.totals.work_hours if transition.totals else (record.work_hours if record else None),
            ),
            event=transition.event,
        )

    def get_today(self, user_id: int, *, today: date | None = None) -> TodayView:
        return self.get_day(user_id, today or now_local().date())

    def get_day(self, user_id: int, work_date: date) -> TodayView:
        """Record and details for one date; empty, not an error, when missing."""

        record = self._attendance.get_for_user_and_date(user_id, work_date)
        details = self._attendance.get_details(record.record_id) if record else []
        return TodayView(record=record, details=details, status=status_from_details(record, details))

    def get_history(self, user_id: int, query: HistoryQuery) -> HistoryPage:
        records = self._attendance.list_for_user(
            user_id,
            history_filter=query.filter,
            limit=query.limit,
            offset=query.offset,
        )
        total = self._attendance.count_for_user(user_id, history_filter=query.filter)
        everything = self._attendance.list_for_user(user_id, history_filter=query.filter)
        return HistoryPage(
            records=records,
            summary=summarize(everything),
            page=query.page,
            limit=query.limit,
            total=total,
        )

    def export_csv(self, user_id: int, history_filter: HistoryFilter) -> CsvExport:
        records = self._attendance.list_for_user(user_id, history_filter=history_filter, newest_first=False)
        if not records:
            raise NotFound("No data found")
        return CsvExport(filename=export_filename(history_filter), content=render_csv(records))
