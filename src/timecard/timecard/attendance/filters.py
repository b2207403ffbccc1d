from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_int
from ..core.enums import FilterMode
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class HistoryFilter:
    """Which records of a user a history/export/stats query covers."""

    mode: FilterMode = FilterMode.ALL
    work_date: Optional[date] = None
    month: Optional[int] = None
    year: Optional[int] = None
    start: Optional[date] = None
    end: Optional[date] = None

    @classmethod
    def all(cls) -> "HistoryFilter":
        return cls()

    @classmethod
    def exact_date(cls, work_date: date) -> "HistoryFilter":
        return cls(mode=FilterMode.DATE, work_date=work_date)

    @classmethod
    def month_only(cls, month: int) -> "HistoryFilter":
        return cls(mode=FilterMode.MONTH, month=month)

    @classmethod
    def month_of_year(cls, month: int, year: int) -> "HistoryFilter":
        return cls(mode=FilterMode.MONTH_YEAR, month=month, year=year)

    @classmethod
    def between(cls, start: date, end: date) -> "HistoryFilter":
        if end < start:
            raise ValidationError("end must not be before start")
        return cls(mode=FilterMode.RANGE, start=start, end=end)

    @classmethod
    def from_query(
        cls,
        *,
        date_s: Optional[str] = None,
        month_s: Optional[str] = None,
        year_s: Optional[str] = None,
    ) -> "HistoryFilter":
        """Build a filter from raw query parameters.

        ``date`` wins over ``month``; ``month`` alone matches that month of any
        year; ``year`` is only honoured together with ``month``.
        """

        if date_s:
            return cls.exact_date(parse_iso_date(date_s))

        month = optional_int(month_s, "month", minimum=1, maximum=12)
        year = optional_int(year_s, "year", minimum=1970, maximum=9999)
        if month is not None and year is not None:
            return cls.month_of_year(month, year)
        if month is not None:
            return cls.month_only(month)
        return cls.all()

    def matches(self, work_date: date) -> bool:
        if self.mode == FilterMode.DATE:
            return work_date == self.work_date
        if self.mode == FilterMode.MONTH:
            # "-MM-" substring of the ISO date: month component, any year.
            return f"-{self.month:02d}-" in work_date.isoformat()
        if self.mode == FilterMode.MONTH_YEAR:
            return work_date.month == self.month and work_date.year == self.year
        if self.mode == FilterMode.RANGE:
            return self.start <= work_date <= self.end
        return True
