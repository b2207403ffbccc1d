from __future__ import annotations

from contextlib import contextmanager
from datetime import date, time
from decimal import Decimal
from typing import Any, Iterator, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import ClockType, FilterMode
from ..core.exceptions import AlreadyClockedIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .filters import HistoryFilter
from .model import AttendanceDetail, AttendanceRecord
from .repository import AttendanceRepository, AttendanceStore

_RECORD_COLUMNS = "record_id, user_id, work_date, clock_in, clock_out, break_minutes, work_hours"


def _to_record(r: dict) -> AttendanceRecord:
    work_hours = r.get("work_hours")
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        clock_in=normalize_mysql_time(r.get("clock_in")),
        clock_out=normalize_mysql_time(r.get("clock_out")),
        break_minutes=int(r["break_minutes"]) if r.get("break_minutes") is not None else None,
        work_hours=Decimal(str(work_hours)) if work_hours is not None else None,
    )


def _to_detail(r: dict) -> AttendanceDetail:
    return AttendanceDetail(
        detail_id=int(r["detail_id"]),
        record_id=int(r["record_id"]),
        type=ClockType(r["type"]),
        time=normalize_mysql_time(r["time"]),
    )


def _filter_clause(history_filter: HistoryFilter) -> tuple[str, list[Any]]:
    mode = history_filter.mode
    if mode == FilterMode.DATE:
        return " AND work_date=%s", [history_filter.work_date]
    if mode == FilterMode.MONTH:
        return " AND MONTH(work_date)=%s", [history_filter.month]
    if mode == FilterMode.MONTH_YEAR:
        return " AND MONTH(work_date)=%s AND YEAR(work_date)=%s", [history_filter.month, history_filter.year]
    if mode == FilterMode.RANGE:
        return " AND work_date BETWEEN %s AND %s", [history_filter.start, history_filter.end]
    return "", []


class _MySQLAttendanceStore(AttendanceStore):
    def __init__(self, cur):
        self._cur = cur

    def find_record(self, user_id: int, work_date: date, *, for_update: bool = False) -> Optional[AttendanceRecord]:
        lock = " FOR UPDATE" if for_update else ""
        self._cur.execute(
            f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s{lock}",
            (user_id, work_date),
        )
        r = fetchone(self._cur)
        return _to_record(r) if r else None

    def create_record(self, *, user_id: int, work_date: date, clock_in: time) -> int:
        try:
            self._cur.execute(
                "INSERT INTO attendance_records(user_id, work_date, clock_in) VALUES(%s,%s,%s)",
                (user_id, work_date, clock_in),
            )
        except mysql.connector.Error as exc:
            # Lost the race against a concurrent first clock-in for the same day:
            # duplicate key, or a deadlock on the gap lock both FOR UPDATE reads took.
            if isinstance(exc, mysql.connector.IntegrityError) or exc.errno == errorcode.ER_LOCK_DEADLOCK:
                raise AlreadyClockedIn("Already clocked in today") from None
            raise
        return int(self._cur.lastrowid)

    def update_record(
        self,
        record_id: int,
        *,
        clock_in: Optional[time] = None,
        clock_out: Optional[time] = None,
        break_minutes: Optional[int] = None,
        work_hours: Optional[Decimal] = None,
    ) -> None:
        fields = {
            "clock_in": clock_in,
            "clock_out": clock_out,
            "break_minutes": break_minutes,
            "work_hours": work_hours,
        }
        assignments = [(col, value) for col, value in fields.items() if value is not None]
        if not assignments:
            return
        sets = ", ".join(f"{col}=%s" for col, _ in assignments)
        params = [value for _, value in assignments] + [record_id]
        self._cur.execute(f"UPDATE attendance_records SET {sets} WHERE record_id=%s", tuple(params))

    def append_detail(self, record_id: int, clock_type: ClockType, at: time) -> int:
        self._cur.execute(
            "INSERT INTO attendance_details(record_id, type, time) VALUES(%s,%s,%s)",
            (record_id, clock_type.value, at),
        )
        return int(self._cur.lastrowid)

    def list_details(self, record_id: int) -> Sequence[AttendanceDetail]:
        self._cur.execute(
            "SELECT detail_id, record_id, type, time FROM attendance_details WHERE record_id=%s ORDER BY detail_id ASC",
            (record_id,),
        )
        return [_to_detail(r) for r in fetchall(self._cur)]


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def transaction(self) -> Iterator[AttendanceStore]:
        with db_cursor(self._conn_factory) as (_, cur):
            yield _MySQLAttendanceStore(cur)

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _MySQLAttendanceStore(cur).find_record(user_id, work_date)

    def get_details(self, record_id: int) -> Sequence[AttendanceDetail]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT detail_id, record_id, type, time
                FROM attendance_details
                WHERE record_id=%s
                ORDER BY time ASC, detail_id ASC
                """,
                (record_id,),
            )
            return [_to_detail(r) for r in fetchall(cur)]

    def list_for_user(
        self,
        user_id: int,
        *,
        history_filter: HistoryFilter,
        limit: Optional[int] = None,
        offset: int = 0,
        newest_first: bool = True,
    ) -> Sequence[AttendanceRecord]:
        where, params = _filter_clause(history_filter)
        order = "DESC" if newest_first else "ASC"
        sql = f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE user_id=%s{where} ORDER BY work_date {order}"
        args: list[Any] = [user_id, *params]
        if limit is not None:
            sql += " LIMIT %s OFFSET %s"
            args.extend([int(limit), int(offset)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(args))
            return [_to_record(r) for r in fetchall(cur)]

    def count_for_user(self, user_id: int, *, history_filter: HistoryFilter) -> int:
        where, params = _filter_clause(history_filter)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS total FROM attendance_records WHERE user_id=%s{where}",
                (user_id, *params),
            )
            row = fetchone(cur)
            return int(row["total"]) if row else 0
