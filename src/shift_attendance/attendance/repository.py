from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_range(self, employee_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Records with start <= work_date <= end, any order."""

        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in_time: time,
        shift_id: Optional[int],
    ) -> AttendanceRecord:
        """Insert an IN record.

        Must honour the (employee_id, work_date) uniqueness: when a row already
        exists, return that row instead of inserting a second one.
        """

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        record_id: int,
        check_out_time: time,
        working_hours: str,
        status: AttendanceStatus,
        regularized: bool = False,
    ) -> bool:
        raise NotImplementedError

    def count_regularized(self, employee_id: str, year: int, month: int) -> int:
        raise NotImplementedError
