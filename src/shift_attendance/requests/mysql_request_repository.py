from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_record_date
from ..core.enums import RequestStatus
from ..core.exceptions import RecordNotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..shifts.timezone import normalize_instant
from .model import CheckInRegularizationRequest
from .repository import RegularizationRequestRepository

_SELECT = """
    SELECT request_id, employee_id, employee_name, work_date, manager, reason,
           status, created_at, decided_by, decided_at, approver_comments
    FROM checkin_regularization_requests
"""


def _to_db(instant: datetime) -> datetime:
    # DATETIME columns hold naive UTC.
    return normalize_instant(instant).astimezone(timezone.utc).replace(tzinfo=None)


def _from_db(value: Any) -> Optional[datetime]:
    return normalize_instant(value) if isinstance(value, datetime) else None


def _to_request(r: dict) -> CheckInRegularizationRequest:
    return CheckInRegularizationRequest(
        request_id=int(r["request_id"]),
        employee_id=str(r["employee_id"]),
        employee_name=str(r["employee_name"] or ""),
        work_date=parse_record_date(r["work_date"]),
        manager=str(r["manager"] or ""),
        reason=str(r["reason"] or ""),
        status=RequestStatus.parse(r["status"]),
        created_at=_from_db(r["created_at"]),
        decided_by=r.get("decided_by"),
        decided_at=_from_db(r.get("decided_at")),
        approver_comments=r.get("approver_comments"),
    )


class MySQLRegularizationRequestRepository(RegularizationRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO checkin_regularization_requests(
                    employee_id, employee_name, work_date, manager, reason, status, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    employee_name,
                    work_date,
                    manager,
                    reason,
                    RequestStatus.PENDING.value,
                    _to_db(created_at),
                ),
            )
            cur.execute(f"{_SELECT} WHERE request_id=%s", (int(cur.lastrowid),))
            r = fetchone(cur)
            if not r:
                raise RecordNotFoundError("Regularization request was not stored")
            return _to_request(r)

    def get_by_id(self, request_id: int) -> Optional[CheckInRegularizationRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def find_pending(self, employee_id: str, work_date: date) -> Optional[CheckInRegularizationRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE employee_id=%s AND work_date=%s AND status=%s LIMIT 1",
                (employee_id, work_date, RequestStatus.PENDING.value),
            )
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_for_employee(self, employee_id: str, *, since: datetime) -> Sequence[CheckInRegularizationRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE employee_id=%s AND created_at >= %s ORDER BY created_at DESC",
                (employee_id, _to_db(since)),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_pending(self, *, since: datetime, manager: Optional[str] = None) -> Sequence[CheckInRegularizationRequest]:
        sql = f"{_SELECT} WHERE status=%s AND created_at >= %s"
        params: list = [RequestStatus.PENDING.value, _to_db(since)]
        if manager:
            sql += " AND manager=%s"
            params.append(manager)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{sql} ORDER BY created_at DESC", tuple(params))
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: str,
        decided_at: datetime,
        approver_comments: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE checkin_regularization_requests
                SET status=%s, decided_by=%s, decided_at=%s, approver_comments=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    decided_by,
                    _to_db(decided_at),
                    approver_comments,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0
