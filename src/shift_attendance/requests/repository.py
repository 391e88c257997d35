from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import CheckInRegularizationRequest


class RegularizationRequestRepository(Protocol):
    def create(
        self,
        *,
        employee_id: str,
        employee_name: str,
        work_date: date,
        manager: str,
        reason: str,
        created_at: datetime,
    ) -> CheckInRegularizationRequest:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[CheckInRegularizationRequest]:
        raise NotImplementedError

    def find_pending(self, employee_id: str, work_date: date) -> Optional[CheckInRegularizationRequest]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str, *, since: datetime) -> Sequence[CheckInRegularizationRequest]:
        """Requests created at or after ``since``, any order."""

        raise NotImplementedError

    def list_pending(self, *, since: datetime, manager: Optional[str] = None) -> Sequence[CheckInRegularizationRequest]:
        """Pending requests created at or after ``since``; every manager when ``manager`` is None."""

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: str,
        decided_at: datetime,
        approver_comments: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError
