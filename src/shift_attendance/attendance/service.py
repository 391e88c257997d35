from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import elapsed_seconds, format_duration, format_elapsed, now_utc
from ..common.validators import require_non_empty
from ..core.enums import AttendanceState
from ..core.exceptions import ValidationError
from ..core.settings import AttendanceSettings
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from ..shifts.window import ShiftWindowResolver
from .calculator import WorkDurationCalculator
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, CheckoutOutcome
from .repository import AttendanceRepository
from .state import AttendanceStateResolver

logger = logging.getLogger("shift_attendance.attendance")


class CheckInOutProcessor:
    def __init__(
        self,
        attendance: AttendanceRepository,
        shifts: ShiftRepository,
        *,
        settings: Optional[AttendanceSettings] = None,
        resolver: Optional[ShiftWindowResolver] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        state_resolver: Optional[AttendanceStateResolver] = None,
    ):
        self._attendance = attendance
        self._shifts = shifts
        self._settings = settings or AttendanceSettings()
        self._resolver = resolver or ShiftWindowResolver(self._settings)
        self._factory = strategy_factory or AttendanceStrategyFactory(self._settings.thresholds)
        self._calculator = WorkDurationCalculator(self._resolver, self._factory)
        self._states = state_resolver or AttendanceStateResolver(self._settings, self._resolver)

    @property
    def calculator(self) -> WorkDurationCalculator:
        return self._calculator

    def get_shift(self, shift_id: Optional[int]) -> Optional[Shift]:
        if not shift_id:
            return None
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise ValidationError("Shift does not exist")
        return shift

    def local_now(self, shift: Optional[Shift], now: Optional[datetime] = None) -> datetime:
        return self._resolver.projector.project(now or now_utc(), shift.time_zone if shift else None)

    def work_day(self, shift: Optional[Shift], now: Optional[datetime] = None) -> date:
        """Calendar day of the shift occurrence ``now`` belongs to.

        After local midnight an overnight shift that is still inside
        yesterday's window keeps yesterday as its day.
        """

        local_now = self.local_now(shift, now)
        if shift is not None and shift.is_overnight:
            yesterday = local_now.date() - timedelta(days=1)
            if self._resolver.resolve_window(shift, yesterday).contains(local_now):
                return yesterday
        return local_now.date()

    def current_record(self, employee_id: str, shift: Optional[Shift], *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(employee_id, self.work_day(shift, now))

    def check_in(self, employee_id: str, shift_id: Optional[int], *, now: Optional[datetime] = None) -> AttendanceRecord:
        """Open today's record, or hand back the one that already exists.

        A repeated check-in (double click, retried request) is not an error.
        A new check-in against a shift is only accepted while its window is
        ACTIVE.
        """

        employee_id = require_non_empty(employee_id, "Employee")
        shift = self.get_shift(shift_id)
        local_now = self.local_now(shift, now)
        today = self.work_day(shift, local_now)

        existing = self._attendance.get_for_employee_and_date(employee_id, today)
        if existing:
            logger.info(
                "attendance_check_in_existing",
                extra={"employee_id": employee_id, "record_id": existing.record_id},
            )
            return existing

        if shift is not None:
            state = self._states.resolve(shift, local_now)
            if state.state != AttendanceState.ACTIVE:
                logger.info(
                    "attendance_check_in_refused",
                    extra={"employee_id": employee_id, "state": state.state.value},
                )
                raise ValidationError(state.message or "Check-in is not available right now")

        record = self._attendance.create_checkin(
            employee_id=employee_id,
            work_date=today,
            check_in_time=local_now.time().replace(second=0, microsecond=0),
            shift_id=shift.shift_id if shift else None,
        )
        logger.info(
            "attendance_check_in",
            extra={"employee_id": employee_id, "record_id": record.record_id, "work_date": today.isoformat()},
        )
        return record

    def compute_checkout(self, record: AttendanceRecord, shift: Optional[Shift], *, now: Optional[datetime] = None) -> CheckoutOutcome:
        return self._calculator.compute_checkout(record, shift, now or now_utc())

    def check_out(self, record: Optional[AttendanceRecord], shift: Optional[Shift], *, now: Optional[datetime] = None) -> AttendanceRecord:
        if record is None:
            raise ValidationError("You have not checked in today")
        if record.is_completed:
            raise ValidationError("You have already checked out")
        now = now or now_utc()
        if not self.can_check_out(record, shift, now=now):
            minimum = format_duration(self._settings.min_work_duration_minutes)
            raise ValidationError(f"Check-out is available after {minimum} hours of work")

        outcome = self.compute_checkout(record, shift, now=now)
        ok = self._attendance.update_checkout(
            record_id=record.record_id,
            check_out_time=outcome.check_out_time,
            working_hours=outcome.working_hours,
            status=outcome.status,
        )
        if not ok:
            raise ValidationError("Check-out update failed")

        logger.info(
            "attendance_check_out",
            extra={
                "employee_id": record.employee_id,
                "record_id": record.record_id,
                "working_hours": outcome.working_hours,
                "effective_minutes": outcome.effective_minutes,
                "status": outcome.status.value,
            },
        )
        return replace(
            record,
            check_out_time=outcome.check_out_time,
            working_hours=outcome.working_hours,
            status=outcome.status,
        )

    def elapsed(self, record: Optional[AttendanceRecord], shift: Optional[Shift], *, now: Optional[datetime] = None) -> str:
        """Running HH:MM:SS timer for an open record."""

        if record is None or not record.is_open:
            return "00:00:00"
        start = self._calculator.actual_start(record, shift)
        return format_elapsed(elapsed_seconds(start, now or now_utc()))

    def can_check_out(self, record: Optional[AttendanceRecord], shift: Optional[Shift], *, now: Optional[datetime] = None) -> bool:
        """Checkout is offered only after the minimum work duration."""

        if record is None or not record.is_open:
            return False
        start = self._calculator.actual_start(record, shift)
        worked_minutes = elapsed_seconds(start, now or now_utc()) // 60
        return worked_minutes >= self._settings.min_work_duration_minutes

    def history(self, employee_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        if end < start:
            raise ValidationError("End date must be on or after start date")
        rows = self._attendance.list_range(employee_id, start, end)
        return sorted(rows, key=lambda r: r.work_date)

    def missed_checkouts(self, employee_id: str, today: date, *, start: Optional[date] = None) -> Sequence[AttendanceRecord]:
        """Open records from earlier days, oldest first. Defaults to this month."""

        start = start or today.replace(day=1)
        if start > today:
            return []
        rows = self._attendance.list_range(employee_id, start, today)
        return sorted((r for r in rows if r.is_open and r.work_date < today), key=lambda r: r.work_date)
