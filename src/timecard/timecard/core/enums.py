from __future__ import annotations

from enum import Enum


class ClockType(str, Enum):
    """Kinds of clock events a user can record during a day."""

    CLOCK_IN = "clock-in"
    CLOCK_OUT = "clock-out"
    BREAK_START = "break-start"
    BREAK_END = "break-end"


class WorkStatus(str, Enum):
    """Current status of a user's day, derived from the last clock event."""

    NOT_STARTED = "not_started"
    WORKING = "working"
    ON_BREAK = "on_break"
    FINISHED = "finished"
    OFF_DUTY = "off_duty"


class FilterMode(str, Enum):
    """History filter modes. Kept distinct on purpose, never merged."""

    ALL = "all"
    DATE = "date"
    MONTH = "month"
    MONTH_YEAR = "month_year"
    RANGE = "range"
