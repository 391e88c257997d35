from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Optional

from ..core.enums import AttendanceState, AttendanceStatus
from ..core.settings import AttendanceSettings
from ..shifts.model import Shift
from ..shifts.window import ShiftWindowResolver
from .model import AttendanceRecord, StateResult

SATURDAY = 5


class AttendanceStateResolver:
    """Decide which attendance action, if any, is available right now.

    States derived from a stored record always win over states derived from
    the clock: a record reflects an HR decision (holiday, leave, absent) or an
    action the employee already took.
    """

    def __init__(self, settings: Optional[AttendanceSettings] = None, resolver: Optional[ShiftWindowResolver] = None):
        self._settings = settings or AttendanceSettings()
        self._resolver = resolver or ShiftWindowResolver(self._settings)

    def resolve(
        self,
        shift: Optional[Shift],
        now: datetime,
        record: Optional[AttendanceRecord] = None,
    ) -> StateResult:
        if shift is None:
            return StateResult(AttendanceState.LOADING, "Loading shift")

        zone_name = str(self._resolver.zone_for(shift))
        from_record = self._from_record(record, zone_name)
        if from_record is not None:
            return from_record

        local_now = self._resolver.projector.project(now, shift.time_zone)

        if record is None and local_now.weekday() >= SATURDAY:
            return StateResult(AttendanceState.WEEKEND, "Weekend - Enjoy your break!", time_zone=zone_name)

        # Yesterday first: an overnight shift is still running after local midnight.
        yesterday = self._resolver.resolve_window(shift, local_now.date() - timedelta(days=1))
        if yesterday.contains(local_now):
            return StateResult(AttendanceState.ACTIVE, window=yesterday, time_zone=zone_name)

        today = self._resolver.resolve_window(shift, local_now.date())
        if today.contains(local_now):
            return StateResult(AttendanceState.ACTIVE, window=today, time_zone=zone_name)

        if local_now < today.check_in_open:
            minutes = math.ceil((today.check_in_open - local_now).total_seconds() / 60)
            return StateResult(
                AttendanceState.UPCOMING,
                self._opens_in_message(minutes),
                window=today,
                time_zone=zone_name,
                minutes_until_open=minutes,
            )

        return StateResult(AttendanceState.CLOSED, "Attendance Closed for the day", window=today, time_zone=zone_name)

    def _from_record(self, record: Optional[AttendanceRecord], zone_name: str) -> Optional[StateResult]:
        if record is None:
            return None
        if record.status == AttendanceStatus.HOLIDAY:
            return StateResult(AttendanceState.HOLIDAY, "Holiday", time_zone=zone_name)
        if record.status == AttendanceStatus.LEAVE:
            return StateResult(AttendanceState.ON_LEAVE, "On leave", time_zone=zone_name)
        if record.status == AttendanceStatus.ABSENT and not record.is_open:
            return StateResult(AttendanceState.ABSENT, "Marked absent", time_zone=zone_name)
        if record.is_completed:
            return StateResult(AttendanceState.COMPLETED, "Shift completed", time_zone=zone_name)
        if record.is_open:
            return StateResult(AttendanceState.ACTIVE, "Checked in", time_zone=zone_name)
        return None

    def _opens_in_message(self, minutes: int) -> str:
        if minutes <= 60:
            return f"Check-in opens in {minutes} minute{'s' if minutes != 1 else ''}"
        hours = minutes // 60
        return f"Check-in opens in {hours} hour{'s' if hours != 1 else ''}"
