from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    working_hours: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how a checkout decides the day's status."""

    @abstractmethod
    def decide_checkout(self, *, effective_minutes: int, current: AttendanceStatus) -> StatusDecision:
        raise NotImplementedError
