"""Typed request structs for the attendance endpoints.

Each struct validates its raw input before anything reaches the services.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_time_of_day
from ..common.validators import optional_int, require_object
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_HISTORY_PAGE, MAX_HISTORY_LIMIT
from ..core.enums import ClockType
from ..core.exceptions import ValidationError
from .filters import HistoryFilter


@dataclass(frozen=True)
class ClockRequest:
    type: ClockType
    time: time

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "ClockRequest":
        payload = require_object(payload)
        raw_type = payload.get("type")
        raw_time = payload.get("time")
        if not raw_type or not raw_time:
            raise ValidationError("Type and time are required")
        try:
            clock_type = ClockType(raw_type)
        except ValueError:
            raise ValidationError("Invalid type") from None
        return cls(type=clock_type, time=parse_time_of_day(raw_time))


@dataclass(frozen=True)
class HistoryQuery:
    filter: HistoryFilter
    page: int = DEFAULT_HISTORY_PAGE
    limit: int = DEFAULT_HISTORY_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "HistoryQuery":
        page = optional_int(args.get("page"), "page", minimum=1)
        limit = optional_int(args.get("limit"), "limit", minimum=1, maximum=MAX_HISTORY_LIMIT)
        return cls(
            filter=HistoryFilter.from_query(
                date_s=args.get("date"),
                month_s=args.get("month"),
                year_s=args.get("year"),
            ),
            page=page or DEFAULT_HISTORY_PAGE,
            limit=limit or DEFAULT_HISTORY_LIMIT,
        )
