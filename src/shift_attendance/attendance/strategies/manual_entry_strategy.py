from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class ManualEntryStrategy(AttendanceStrategy):
    """Midnight-to-midnight rows mark a manually entered non-working day.

    No hours are credited and whatever status HR recorded is kept.
    """

    def decide_checkout(self, *, effective_minutes: int, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current, working_hours="00:00")
