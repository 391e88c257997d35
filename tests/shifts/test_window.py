from datetime import date, datetime, time, timedelta, timezone

from shift_attendance.core.settings import AttendanceSettings
from shift_attendance.shifts.model import Shift
from shift_attendance.shifts.window import ShiftWindowResolver

UTC = timezone.utc


def test_day_shift_window_has_grace_on_both_sides():
    shift = Shift(shift_id=1, shift_name="General", start_time=time(9, 0), end_time=time(18, 0), time_zone="UTC")
    window = ShiftWindowResolver().resolve_window(shift, date(2025, 1, 6))

    assert window.shift_start == datetime(2025, 1, 6, 9, 0, tzinfo=window.time_zone)
    assert window.shift_end == datetime(2025, 1, 6, 18, 0, tzinfo=window.time_zone)
    assert window.check_in_open == datetime(2025, 1, 6, 8, 0, tzinfo=window.time_zone)
    assert window.check_out_close == datetime(2025, 1, 6, 20, 0, tzinfo=window.time_zone)


def test_overnight_shift_ends_next_day():
    shift = Shift(shift_id=2, shift_name="Night", start_time=time(22, 0), end_time=time(7, 0), time_zone="UTC")
    window = ShiftWindowResolver().resolve_window(shift, date(2025, 1, 6))

    assert shift.is_overnight
    assert window.shift_end - window.shift_start == timedelta(hours=9)
    assert window.shift_end.date() == date(2025, 1, 7)
    assert window.contains(datetime(2025, 1, 7, 8, 30, tzinfo=UTC))
    assert not window.contains(datetime(2025, 1, 7, 9, 1, tzinfo=UTC))


def test_equal_start_and_end_is_a_full_day():
    shift = Shift(shift_id=5, shift_name="Round the clock", start_time=time(8, 0), end_time=time(8, 0), time_zone="UTC")
    window = ShiftWindowResolver().resolve_window(shift, date(2025, 1, 6))

    assert window.shift_end - window.shift_start == timedelta(hours=24)


def test_window_boundaries_are_inclusive():
    shift = Shift(shift_id=1, shift_name="General", start_time=time(9, 0), end_time=time(18, 0), time_zone="UTC")
    window = ShiftWindowResolver().resolve_window(shift, date(2025, 1, 6))

    assert window.contains(datetime(2025, 1, 6, 8, 0, tzinfo=UTC))
    assert window.contains(datetime(2025, 1, 6, 20, 0, tzinfo=UTC))
    assert not window.contains(datetime(2025, 1, 6, 7, 59, tzinfo=UTC))
    assert not window.contains(datetime(2025, 1, 6, 20, 1, tzinfo=UTC))


def test_instant_reference_is_projected_into_shift_zone():
    shift = Shift(shift_id=3, shift_name="India Day", start_time=time(9, 0), end_time=time(18, 0), time_zone="Asia/Kolkata")
    # 20:00 UTC on the 6th is already the 7th in Kolkata.
    window = ShiftWindowResolver().resolve_window(shift, datetime(2025, 1, 6, 20, 0, tzinfo=UTC))

    assert window.shift_start.date() == date(2025, 1, 7)
    assert window.shift_start.astimezone(UTC) == datetime(2025, 1, 7, 3, 30, tzinfo=UTC)


def test_custom_grace_minutes():
    settings = AttendanceSettings(check_in_window_minutes=15, check_out_window_minutes=30)
    shift = Shift(shift_id=1, shift_name="General", start_time=time(9, 0), end_time=time(18, 0), time_zone="UTC")
    window = ShiftWindowResolver(settings).resolve_window(shift, date(2025, 1, 6))

    assert window.check_in_open.time() == time(8, 45)
    assert window.check_out_close.time() == time(18, 30)


def test_intersection_counts_only_scheduled_minutes():
    shift = Shift(shift_id=1, shift_name="General", start_time=time(9, 0), end_time=time(18, 0), time_zone="UTC")
    window = ShiftWindowResolver().resolve_window(shift, date(2025, 1, 6))

    early_to_late = window.intersect_minutes(
        datetime(2025, 1, 6, 8, 50, tzinfo=UTC), datetime(2025, 1, 6, 18, 20, tzinfo=UTC)
    )
    outside = window.intersect_minutes(
        datetime(2025, 1, 6, 18, 30, tzinfo=UTC), datetime(2025, 1, 6, 19, 0, tzinfo=UTC)
    )

    assert early_to_late == 540
    assert outside == 0
