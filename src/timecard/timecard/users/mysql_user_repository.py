from __future__ import annotations

from typing import Optional

import mysql.connector

from ..core.exceptions import EmailAlreadyInUse
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, name, email, password_hash, created_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, name: str, email: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    "INSERT INTO users(name, email, password_hash) VALUES(%s,%s,%s)",
                    (name, email, password_hash),
                )
            except mysql.connector.IntegrityError:
                raise EmailAlreadyInUse("Email already in use") from None
            return int(cur.lastrowid)

    def email_taken_by_other(self, email: str, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM users WHERE email=%s AND user_id<>%s", (email, user_id))
            return fetchone(cur) is not None

    def update_profile(self, user_id: int, *, name: str, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute("UPDATE users SET name=%s, email=%s WHERE user_id=%s", (name, email, user_id))
            except mysql.connector.IntegrityError:
                raise EmailAlreadyInUse("Email already in use") from None
            return cur.rowcount > 0

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, user_id))
            return cur.rowcount > 0
