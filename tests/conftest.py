from __future__ import annotations

import copy
from contextlib import contextmanager
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

import pytest

from timecard.attendance.model import AttendanceDetail, AttendanceRecord
from timecard.container import build_services
from timecard.core.enums import ClockType
from timecard.core.exceptions import AlreadyClockedIn, EmailAlreadyInUse, StoreFailure
from timecard.users.model import User


class InMemoryAttendance:
    """Attendance repository fake with all-or-nothing transactions."""

    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self.details: list[AttendanceDetail] = []
        self._record_id = 0
        self._detail_id = 0
        self.fail_on: Optional[str] = None

    # --- transaction-scoped store -------------------------------------
    @contextmanager
    def transaction(self):
        snapshot = copy.deepcopy((self.records, self.details, self._record_id, self._detail_id))
        try:
            yield self
        except Exception:
            self.records, self.details, self._record_id, self._detail_id = snapshot
            raise

    def _maybe_fail(self, operation: str) -> None:
        if self.fail_on == operation:
            raise StoreFailure(f"simulated failure in {operation}")

    def find_record(self, user_id: int, work_date: date, *, for_update: bool = False) -> Optional[AttendanceRecord]:
        for r in self.records.values():
            if r.user_id == user_id and r.work_date == work_date:
                return r
        return None

    def create_record(self, *, user_id: int, work_date: date, clock_in: time) -> int:
        self._maybe_fail("create_record")
        if self.find_record(user_id, work_date):
            raise AlreadyClockedIn("Already clocked in today")
        self._record_id += 1
        self.records[self._record_id] = AttendanceRecord(
            record_id=self._record_id,
            user_id=user_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=None,
        )
        return self._record_id

    def update_record(self, record_id: int, *, clock_in=None, clock_out=None, break_minutes=None, work_hours=None) -> None:
        self._maybe_fail("update_record")
        r = self.records[record_id]
        self.records[record_id] = AttendanceRecord(
            record_id=r.record_id,
            user_id=r.user_id,
            work_date=r.work_date,
            clock_in=clock_in if clock_in is not None else r.clock_in,
            clock_out=clock_out if clock_out is not None else r.clock_out,
            break_minutes=break_minutes if break_minutes is not None else r.break_minutes,
            work_hours=work_hours if work_hours is not None else r.work_hours,
        )

    def append_detail(self, record_id: int, clock_type: ClockType, at: time) -> int:
        self._maybe_fail("append_detail")
        self._detail_id += 1
        self.details.append(AttendanceDetail(detail_id=self._detail_id, record_id=record_id, type=clock_type, time=at))
        return self._detail_id

    def list_details(self, record_id: int):
        return [d for d in self.details if d.record_id == record_id]

    # --- read side ------------------------------------------------------
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self.find_record(user_id, work_date)

    def get_details(self, record_id: int):
        return sorted(self.list_details(record_id), key=lambda d: (d.time, d.detail_id))

    def list_for_user(self, user_id: int, *, history_filter, limit=None, offset=0, newest_first=True):
        items = [r for r in self.records.values() if r.user_id == user_id and history_filter.matches(r.work_date)]
        items.sort(key=lambda r: r.work_date, reverse=newest_first)
        if limit is not None:
            return items[offset : offset + limit]
        return items

    def count_for_user(self, user_id: int, *, history_filter) -> int:
        return len(self.list_for_user(user_id, history_filter=history_filter))

    # --- test helpers ---------------------------------------------------
    def seed(self, *, user_id: int, work_date: date, clock_in=None, clock_out=None, work_hours=None, break_minutes=None):
        self._record_id += 1
        self.records[self._record_id] = AttendanceRecord(
            record_id=self._record_id,
            user_id=user_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=clock_out,
            break_minutes=break_minutes,
            work_hours=Decimal(work_hours) if work_hours is not None else None,
        )
        return self._record_id


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}
        self._id = 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(self, *, name: str, email: str, password_hash: str) -> int:
        if self.get_by_email(email):
            raise EmailAlreadyInUse("Email already in use")
        self._id += 1
        self.users[self._id] = User(
            user_id=self._id,
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=datetime(2025, 3, 1, 9, 0, 0),
        )
        return self._id

    def email_taken_by_other(self, email: str, user_id: int) -> bool:
        u = self.get_by_email(email)
        return u is not None and u.user_id != user_id

    def update_profile(self, user_id: int, *, name: str, email: str) -> bool:
        u = self.users.get(user_id)
        if not u:
            return False
        self.users[user_id] = User(u.user_id, name, email, u.password_hash, u.created_at)
        return True

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        u = self.users.get(user_id)
        if not u:
            return False
        self.users[user_id] = User(u.user_id, u.name, u.email, password_hash, u.created_at)
        return True


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 12, 9, 0, 0)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def container(users_repo, attendance_repo):
    return build_services(users_repo=users_repo, attendance_repo=attendance_repo, jwt_secret="test-jwt-secret")


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from timecard.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
