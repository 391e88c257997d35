from __future__ import annotations

from ...core.enums import AttendanceStatus
from ...core.settings import StatusThresholds
from .base import AttendanceStrategy, StatusDecision


class ThresholdStrategy(AttendanceStrategy):
    """Classify on effective hours: Absent, Half Day or Present."""

    def __init__(self, thresholds: StatusThresholds):
        self._thresholds = thresholds

    def decide_checkout(self, *, effective_minutes: int, current: AttendanceStatus) -> StatusDecision:
        hours = effective_minutes / 60
        if hours < self._thresholds.absent_below_hours:
            return StatusDecision(status=AttendanceStatus.ABSENT)
        if hours < self._thresholds.half_day_below_hours:
            return StatusDecision(status=AttendanceStatus.HALF_DAY)
        return StatusDecision(status=AttendanceStatus.PRESENT)
