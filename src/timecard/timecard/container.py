from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TOKEN_HOURS
from .database.connection import DatabaseConnection, DBConfig
from .reports.service import StatsService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    token_service: TokenService
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    stats_service: StatsService


def build_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    jwt_secret: str,
    jwt_expires_hours: int = DEFAULT_TOKEN_HOURS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories (MySQL or in-memory)."""

    token_service = TokenService(jwt_secret, expires_hours=jwt_expires_hours)
    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        token_service=token_service,
        auth_service=AuthService(users_repo, token_service),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(attendance_repo),
        stats_service=StatsService(attendance_repo),
    )


def build_container(*, db_config: dict, jwt_secret: str, jwt_expires_hours: int = DEFAULT_TOKEN_HOURS) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        jwt_secret=jwt_secret,
        jwt_expires_hours=jwt_expires_hours,
        conn=conn,
    )
