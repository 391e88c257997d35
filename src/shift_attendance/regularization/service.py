from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..attendance.calculator import WorkDurationCalculator
from ..attendance.factory import AttendanceStrategyFactory
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.exceptions import RegularizationQuotaExceeded, ValidationError
from ..core.settings import AttendanceSettings
from ..shifts.model import Shift
from ..shifts.window import ShiftWindowResolver

logger = logging.getLogger("shift_attendance.regularization")


class RegularizationEngine:
    """Close a missed checkout at the shift's scheduled end.

    Limited to ``regularization_monthly_quota`` records per employee per
    calendar month.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        settings: Optional[AttendanceSettings] = None,
        resolver: Optional[ShiftWindowResolver] = None,
        calculator: Optional[WorkDurationCalculator] = None,
    ):
        self._attendance = attendance
        self._settings = settings or AttendanceSettings()
        self._resolver = resolver or ShiftWindowResolver(self._settings)
        self._calculator = calculator or WorkDurationCalculator(
            self._resolver, AttendanceStrategyFactory(self._settings.thresholds)
        )

    @property
    def quota(self) -> int:
        return self._settings.regularization_monthly_quota

    def used_this_month(self, employee_id: str, year: int, month: int) -> int:
        return int(self._attendance.count_regularized(employee_id, year, month))

    def remaining_this_month(self, employee_id: str, year: int, month: int) -> int:
        return max(self.quota - self.used_this_month(employee_id, year, month), 0)

    def regularize(self, record: AttendanceRecord, shift: Optional[Shift]) -> AttendanceRecord:
        if not record.is_open:
            raise ValidationError("Only a missed checkout can be regularized")
        if shift is None:
            raise ValidationError("Shift information not found")

        year, month = record.work_date.year, record.work_date.month
        used = self.used_this_month(record.employee_id, year, month)
        if used >= self.quota:
            logger.warning(
                "regularization_quota_exceeded",
                extra={"employee_id": record.employee_id, "record_id": record.record_id, "used": used},
            )
            raise RegularizationQuotaExceeded(
                employee_id=record.employee_id, year=year, month=month, used=used, quota=self.quota
            )

        window = self._resolver.resolve_window(shift, record.work_date)
        outcome = self._calculator.compute_checkout(record, shift, window.shift_end)

        ok = self._attendance.update_checkout(
            record_id=record.record_id,
            check_out_time=outcome.check_out_time,
            working_hours=outcome.working_hours,
            status=outcome.status,
            regularized=True,
        )
        if not ok:
            raise ValidationError("Regularization update failed")

        logger.info(
            "attendance_regularized",
            extra={
                "employee_id": record.employee_id,
                "record_id": record.record_id,
                "working_hours": outcome.working_hours,
                "status": outcome.status.value,
                "used": used + 1,
            },
        )
        return replace(
            record,
            check_out_time=outcome.check_out_time,
            working_hours=outcome.working_hours,
            status=outcome.status,
            regularized=True,
        )
