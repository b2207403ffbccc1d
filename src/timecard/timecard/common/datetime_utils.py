from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError("Invalid date format. Use YYYY-MM-DD") from None


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM or HH:MM:SS into a time of day."""
    if isinstance(value, str):
        for fmt in ("%H:%M:%S", "%H:%M"):
            try:
                return datetime.strptime(value.strip(), fmt).time()
            except ValueError:
                continue
    raise ValidationError("Invalid time format. Use HH:MM or HH:MM:SS")


def format_time(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M:%S") if value is not None else None


def week_bounds(day: date) -> tuple[date, date]:
    """Monday..Sunday of the ISO week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
