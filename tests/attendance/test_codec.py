import logging
from datetime import date, time

import pytest

from shift_attendance.attendance.codec import parse_regularized, record_from_row, record_to_row, shift_from_row
from shift_attendance.common.datetime_utils import (
    format_12h,
    format_duration,
    parse_optional_wall_clock,
    parse_record_date,
    parse_wall_clock,
)
from shift_attendance.core.enums import AttendanceStatus
from shift_attendance.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", AttendanceStatus.PRESENT),
        (None, AttendanceStatus.PRESENT),
        ("IN", AttendanceStatus.CHECKED_IN),
        ("Half Day", AttendanceStatus.HALF_DAY),
        ("half-day", AttendanceStatus.HALF_DAY),
        ("Sick Leave", AttendanceStatus.LEAVE),
        ("On Time", AttendanceStatus.PRESENT),
        ("Late", AttendanceStatus.PRESENT),
        ("ABSENT", AttendanceStatus.ABSENT),
        ("Holiday", AttendanceStatus.HOLIDAY),
    ],
)
def test_status_parse(raw, expected):
    assert AttendanceStatus.parse(raw) == expected


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError):
        AttendanceStatus.parse("Vacationing")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("09:30", time(9, 30)),
        ("9:05 AM", time(9, 5)),
        ("12:15 AM", time(0, 15)),
        ("12:00 PM", time(12, 0)),
        ("06:00 PM", time(18, 0)),
        ("6:00 PM", time(18, 0)),
        ("--:--", time(0, 0)),
    ],
)
def test_parse_wall_clock(raw, expected):
    assert parse_wall_clock(raw) == expected


def test_malformed_wall_clock_is_midnight_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="shift_attendance.datetime"):
        assert parse_wall_clock("quarter past nine") == time(0, 0)
        assert parse_wall_clock("25:00") == time(0, 0)

    assert len(caplog.records) == 2


def test_optional_wall_clock_keeps_missing_values():
    assert parse_optional_wall_clock(None) is None
    assert parse_optional_wall_clock("-") is None
    assert parse_optional_wall_clock("07:45 PM") == time(19, 45)


def test_dates_and_formats():
    assert parse_record_date("06/01/2025") == date(2025, 1, 6)
    assert parse_record_date("2025-01-06") == date(2025, 1, 6)
    assert format_12h(time(18, 0)) == "06:00 PM"
    assert format_duration(570) == "09:30"
    assert format_duration(-5) == "00:00"
    with pytest.raises(ValidationError):
        parse_record_date("31/02/2025")


def test_regularized_flag():
    assert parse_regularized("YES")
    assert parse_regularized("Yes - 06/01/2025")
    assert not parse_regularized(None)
    assert not parse_regularized("No")


def test_record_from_list_style_row():
    record = record_from_row(
        {
            "Id": "12",
            "EmployeeId": "E1",
            "Date": "06/01/2025",
            "CheckInTime": "08:50 AM",
            "CheckOutTime": None,
            "Status": "IN",
            "ShiftId": "1",
            "Regularized": None,
        }
    )

    assert record.record_id == 12
    assert record.work_date == date(2025, 1, 6)
    assert record.check_in_time == time(8, 50)
    assert record.is_open
    assert record.shift_id == 1
    assert not record.regularized


def test_record_from_mysql_row_and_back():
    record = record_from_row(
        {
            "record_id": 3,
            "employee_id": "E1",
            "work_date": date(2025, 1, 6),
            "check_in_time": "09:00 AM",
            "check_out_time": "06:00 PM",
            "status": "Present",
            "shift_id": None,
            "working_hours": "09:00",
            "regularized": "YES",
        }
    )

    row = record_to_row(record)

    assert row["Date"] == "06/01/2025"
    assert row["CheckInTime"] == "09:00 AM"
    assert row["CheckOutTime"] == "06:00 PM"
    assert row["Status"] == "Present"
    assert row["Regularized"] == "YES"
    assert row["ShiftId"] is None


def test_record_row_without_id_is_rejected():
    with pytest.raises(ValidationError):
        record_from_row({"EmployeeId": "E1", "Date": "06/01/2025"})


def test_shift_from_row():
    shift = shift_from_row({"Id": 2, "Title": "Night", "StartTime": "22:00", "EndTime": "07:00", "TimeZone": " UTC "})

    assert shift.is_overnight
    assert shift.time_zone == "UTC"
    assert shift.start_time == time(22, 0)
