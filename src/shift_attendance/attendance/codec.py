"""Mapping between store rows and strict domain types.

Rows come from list-style stores (``Date``, ``CheckInTime``, ...) or from the
MySQL adapter (snake_case columns). Everything is normalised here so the
engine never sees schema ambiguity.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..common.datetime_utils import (
    format_12h,
    format_record_date,
    parse_optional_wall_clock,
    parse_record_date,
    parse_wall_clock,
)
from ..core.constants import REGULARIZED_FLAG
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..shifts.model import Shift
from .model import AttendanceRecord


def _pick(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return None


def parse_regularized(value: Any) -> bool:
    """Stored flag is "YES" (older rows: "Yes ..."); anything else is unset."""

    if isinstance(value, bool):
        return value
    text = str(value or "").strip()
    return text.upper() == REGULARIZED_FLAG or text.startswith("Yes")


def _optional_int(value: Any) -> Optional[int]:
    if value is None or str(value).strip() == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid identifier: {value!r}")


def record_from_row(row: Mapping[str, Any]) -> AttendanceRecord:
    record_id = _pick(row, "record_id", "attendance_id", "Id", "id")
    employee_id = _pick(row, "employee_id", "EmployeeId")
    work_date = _pick(row, "work_date", "Date")
    if record_id is None or employee_id is None or work_date is None:
        raise ValidationError("Attendance row is missing id, employee or date")

    return AttendanceRecord(
        record_id=int(record_id),
        employee_id=str(employee_id),
        work_date=parse_record_date(work_date),
        status=AttendanceStatus.parse(_pick(row, "status", "Status")),
        shift_id=_optional_int(_pick(row, "shift_id", "ShiftId")),
        check_in_time=parse_optional_wall_clock(_pick(row, "check_in_time", "CheckInTime")),
        check_out_time=parse_optional_wall_clock(_pick(row, "check_out_time", "CheckOutTime")),
        working_hours=_pick(row, "working_hours", "WorkingHours") or None,
        regularized=parse_regularized(_pick(row, "regularized", "Regularized")),
    )


def record_to_row(record: AttendanceRecord) -> dict:
    """Store encoding: DD/MM/YYYY dates, 12-hour times, "YES"/None flag."""

    return {
        "Id": record.record_id,
        "EmployeeId": record.employee_id,
        "Date": format_record_date(record.work_date),
        "CheckInTime": format_12h(record.check_in_time) if record.check_in_time else None,
        "CheckOutTime": format_12h(record.check_out_time) if record.check_out_time else None,
        "Status": record.status.value,
        "ShiftId": record.shift_id,
        "WorkingHours": record.working_hours,
        "Regularized": REGULARIZED_FLAG if record.regularized else None,
    }


def shift_from_row(row: Mapping[str, Any]) -> Shift:
    shift_id = _pick(row, "shift_id", "Id", "id")
    start = _pick(row, "start_time", "StartTime")
    end = _pick(row, "end_time", "EndTime")
    if shift_id is None or start is None or end is None:
        raise ValidationError("Shift row is missing id, start or end time")

    zone = _pick(row, "time_zone", "TimeZone")
    return Shift(
        shift_id=int(shift_id),
        shift_name=str(_pick(row, "shift_name", "Title", "name") or ""),
        start_time=parse_wall_clock(start),
        end_time=parse_wall_clock(end),
        time_zone=str(zone).strip() if zone else None,
    )
