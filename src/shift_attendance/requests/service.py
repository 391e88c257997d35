from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.enums import RequestStatus
from ..core.exceptions import RecordNotFoundError, ValidationError
from ..core.settings import AttendanceSettings
from ..shifts.timezone import TimeZoneProjector
from .model import CheckInRegularizationRequest
from .repository import RegularizationRequestRepository

logger = logging.getLogger("shift_attendance.requests")

UNASSIGNED_MANAGER = "Not Assigned"


class RegularizationRequestService:
    """Check-in correction requests routed to the employee's manager.

    History and pending lists cover the current calendar month in the
    configured default zone.
    """

    def __init__(
        self,
        requests: RegularizationRequestRepository,
        *,
        settings: Optional[AttendanceSettings] = None,
        projector: Optional[TimeZoneProjector] = None,
    ):
        self._requests = requests
        self._settings = settings or AttendanceSettings()
        self._projector = projector or TimeZoneProjector(self._settings.default_time_zone)

    def _month_start(self, now: datetime) -> datetime:
        local = self._projector.project(now, None)
        return datetime.combine(local.date().replace(day=1), time(0, 0), tzinfo=local.tzinfo)

    def submit(
        self,
        *,
        employee_id: str,
        employee_name: str,
        reason: str,
        manager: Optional[str] = None,
        work_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> CheckInRegularizationRequest:
        employee_id = require_non_empty(employee_id, "Employee")
        employee_name = require_non_empty(employee_name, "Employee name")
        reason = require_non_empty(reason, "Reason")
        now = now or now_utc()
        work_date = work_date or self._projector.local_date(now, None)

        if self._requests.find_pending(employee_id, work_date):
            raise ValidationError("A regularization request for this date is already pending")

        request = self._requests.create(
            employee_id=employee_id,
            employee_name=employee_name,
            work_date=work_date,
            manager=(manager or "").strip() or UNASSIGNED_MANAGER,
            reason=reason,
            created_at=now,
        )
        logger.info(
            "regularization_request_submitted",
            extra={"employee_id": employee_id, "request_id": request.request_id, "manager": request.manager},
        )
        return request

    def history(self, employee_id: str, *, now: Optional[datetime] = None) -> Sequence[CheckInRegularizationRequest]:
        """This month's requests for ``employee_id``, newest first."""

        rows = self._requests.list_for_employee(employee_id, since=self._month_start(now or now_utc()))
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    def pending(self, *, manager: Optional[str] = None, now: Optional[datetime] = None) -> Sequence[CheckInRegularizationRequest]:
        rows = self._requests.list_pending(since=self._month_start(now or now_utc()), manager=manager)
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    def approve(self, request_id: int, *, approver: str, comments: str = "", now: Optional[datetime] = None) -> CheckInRegularizationRequest:
        return self._decide(request_id, RequestStatus.APPROVED, approver=approver, comments=comments, now=now)

    def reject(self, request_id: int, *, approver: str, comments: str = "", now: Optional[datetime] = None) -> CheckInRegularizationRequest:
        return self._decide(request_id, RequestStatus.REJECTED, approver=approver, comments=comments, now=now)

    def _decide(
        self,
        request_id: int,
        status: RequestStatus,
        *,
        approver: str,
        comments: str,
        now: Optional[datetime],
    ) -> CheckInRegularizationRequest:
        approver = require_non_empty(approver, "Approver")
        request = self._requests.get_by_id(int(request_id))
        if request is None:
            raise RecordNotFoundError("Regularization request not found")
        if not request.is_pending:
            raise ValidationError("Request has already been processed")

        decided_at = now or now_utc()
        ok = self._requests.decide(
            request_id=request.request_id,
            status=status,
            decided_by=approver,
            decided_at=decided_at,
            approver_comments=(comments or "").strip() or None,
        )
        if not ok:
            raise ValidationError("Request has already been processed")

        logger.info(
            "regularization_request_decided",
            extra={"request_id": request.request_id, "status": status.value, "decided_by": approver},
        )
        updated = self._requests.get_by_id(request.request_id)
        if updated is None:
            raise RecordNotFoundError("Regularization request not found")
        return updated
