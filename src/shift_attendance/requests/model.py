from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class CheckInRegularizationRequest:
    """An employee's ask to have a day's check-in corrected by their manager."""

    request_id: int
    employee_id: str
    employee_name: str
    work_date: date
    manager: str
    reason: str
    status: RequestStatus
    created_at: datetime
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None
    approver_comments: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING
