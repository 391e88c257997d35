from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceState, AttendanceStatus
from ..shifts.window import ShiftWindow


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (employee, calendar day)."""

    record_id: int
    employee_id: str
    work_date: date
    status: AttendanceStatus
    shift_id: Optional[int] = None
    check_in_time: Optional[time] = None
    check_out_time: Optional[time] = None
    working_hours: Optional[str] = None
    regularized: bool = False

    @property
    def is_open(self) -> bool:
        """Checked in, not yet checked out (on duty or a missed checkout)."""
        return self.check_in_time is not None and self.check_out_time is None

    @property
    def is_completed(self) -> bool:
        return self.check_out_time is not None


@dataclass(frozen=True)
class CheckoutOutcome:
    """Result of a checkout computation, before it is persisted."""

    check_out_time: time
    working_hours: str
    actual_minutes: int
    effective_minutes: int
    status: AttendanceStatus


@dataclass(frozen=True)
class StateResult:
    state: AttendanceState
    message: str = ""
    window: Optional[ShiftWindow] = None
    time_zone: Optional[str] = None
    minutes_until_open: Optional[int] = None
