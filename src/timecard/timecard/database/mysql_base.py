from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreFailure
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Open a connection and cursor as one transaction.

    Commits when the block exits normally; rolls back on any exception.
    Driver errors are re-raised as StoreFailure, domain errors pass through.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("Database connection failed: %s", exc)
        raise StoreFailure("database unavailable") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.error("Database error, transaction rolled back: %s", exc)
        raise StoreFailure("database operation failed") from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Clock time of a TIME column.

    The C extension hands back ``timedelta``, the pure-Python connector and
    some drivers ``time`` or ``'HH:MM[:SS]'`` strings.
    """

    if value is None or isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        minutes, second = divmod(int(value.total_seconds()) % 86400, 60)
        hour, minute = divmod(minutes, 60)
        return time(hour, minute, second)

    if isinstance(value, str):
        hh, sep, rest = value.strip().partition(":")
        if not sep:
            raise ValueError(f"TIME value without ':' separator: {value!r}")
        mm, _, ss = rest.partition(":")
        return time(int(hh), int(mm), int(ss or 0))

    raise TypeError(f"Cannot read TIME from {type(value).__name__}")
