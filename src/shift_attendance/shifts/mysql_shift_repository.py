from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.codec import shift_from_row
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Shift
from .repository import ShiftRepository

_SELECT = "SELECT shift_id, shift_name, start_time, end_time, time_zone FROM shifts"


def _to_shift(row: dict) -> Shift:
    return shift_from_row(
        {
            **row,
            "start_time": normalize_mysql_time(row.get("start_time")),
            "end_time": normalize_mysql_time(row.get("end_time")),
        }
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY shift_id")
            return [_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None
