from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Optional

from ..core.settings import StatusThresholds
from .strategies.base import AttendanceStrategy
from .strategies.manual_entry_strategy import ManualEntryStrategy
from .strategies.threshold_strategy import ThresholdStrategy

MIDNIGHT = time(0, 0)


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the checkout strategy for a record."""

    thresholds: StatusThresholds = field(default_factory=StatusThresholds)

    def for_checkout(self, *, check_in_time: Optional[time], check_out_time: time) -> AttendanceStrategy:
        if check_in_time == MIDNIGHT and check_out_time == MIDNIGHT:
            return ManualEntryStrategy()
        return ThresholdStrategy(self.thresholds)
