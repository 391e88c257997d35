from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..common.datetime_utils import format_12h
from ..core.constants import REGULARIZED_FLAG
from ..core.enums import AttendanceStatus
from ..core.exceptions import RecordNotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .codec import record_from_row
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT record_id, employee_id, work_date, check_in_time, check_out_time,
           status, shift_id, working_hours, regularized
    FROM attendance_records
"""


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return record_from_row(r) if r else None

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE employee_id=%s AND work_date=%s", (employee_id, work_date))
            r = fetchone(cur)
            return record_from_row(r) if r else None

    def list_range(self, employee_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE employee_id=%s AND work_date BETWEEN %s AND %s ORDER BY work_date",
                (employee_id, start, end),
            )
            return [record_from_row(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in_time: time,
        shift_id: Optional[int],
    ) -> AttendanceRecord:
        # INSERT IGNORE + re-read: a concurrent check-in that lost the race on
        # uq_attendance_employee_day gets the winner's row back.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO attendance_records(employee_id, work_date, check_in_time, status, shift_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (employee_id, work_date, format_12h(check_in_time), AttendanceStatus.CHECKED_IN.value, shift_id),
            )
            cur.execute(f"{_SELECT} WHERE employee_id=%s AND work_date=%s", (employee_id, work_date))
            r = fetchone(cur)
            if not r:
                raise RecordNotFoundError("Check-in was not stored")
            return record_from_row(r)

    def update_checkout(
        self,
        *,
        record_id: int,
        check_out_time: time,
        working_hours: str,
        status: AttendanceStatus,
        regularized: bool = False,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, working_hours=%s, status=%s, regularized=%s
                WHERE record_id=%s AND check_out_time IS NULL
                """,
                (
                    format_12h(check_out_time),
                    working_hours,
                    status.value,
                    REGULARIZED_FLAG if regularized else None,
                    int(record_id),
                ),
            )
            return cur.rowcount > 0

    def count_regularized(self, employee_id: str, year: int, month: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total
                FROM attendance_records
                WHERE employee_id=%s AND regularized LIKE 'Yes%%'
                  AND YEAR(work_date)=%s AND MONTH(work_date)=%s
                """,
                (employee_id, int(year), int(month)),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0
