from __future__ import annotations

import csv
import io
from typing import Iterable, Optional

from ..common.datetime_utils import format_time
from ..core.constants import CSV_FIELDS
from .filters import HistoryFilter
from .model import AttendanceRecord


def record_to_row(record: AttendanceRecord) -> dict:
    return {
        "date": record.work_date.strftime("%Y-%m-%d"),
        "clockIn": format_time(record.clock_in),
        "clockOut": format_time(record.clock_out),
        "breakMinutes": record.break_minutes,
        "workHours": str(record.work_hours) if record.work_hours is not None else None,
    }


def render_csv(records: Iterable[AttendanceRecord]) -> bytes:
    """CSV bytes for spreadsheet tools: UTF-8 with BOM, every field quoted.

    Null fields come out as an empty quoted string.
    """

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(CSV_FIELDS), quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writeheader()
    for record in records:
        writer.writerow(record_to_row(record))
    return out.getvalue().encode("utf-8-sig")


def export_filename(history_filter: Optional[HistoryFilter] = None) -> str:
    month = history_filter.month if history_filter and history_filter.month else None
    year = history_filter.year if history_filter and history_filter.year else None
    return f"attendance_{year or 'all'}_{f'{month:02d}' if month else 'all'}.csv"
