from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from typing import Optional

import pytest

from shift_attendance.attendance.model import AttendanceRecord
from shift_attendance.container import build_services
from shift_attendance.core.enums import AttendanceStatus, RequestStatus
from shift_attendance.core.settings import AttendanceSettings
from shift_attendance.requests.model import CheckInRegularizationRequest
from shift_attendance.shifts.model import Shift
from shift_attendance.shifts.timezone import resolve_zone


class InMemoryShifts:
    def __init__(self, shifts: list[Shift]):
        self.shifts = {s.shift_id: s for s in shifts}

    def list_all(self):
        return sorted(self.shifts.values(), key=lambda s: s.shift_id)

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self.shifts.get(shift_id)


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self._id = 0

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self.records[record.record_id] = record
        self._id = max(self._id, record.record_id)
        return record

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        return self.records.get(record_id)

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        for r in self.records.values():
            if r.employee_id == employee_id and r.work_date == work_date:
                return r
        return None

    def list_range(self, employee_id: str, start: date, end: date):
        # Reverse order on purpose: callers must sort.
        items = [r for r in self.records.values() if r.employee_id == employee_id and start <= r.work_date <= end]
        return sorted(items, key=lambda r: r.work_date, reverse=True)

    def create_checkin(self, *, employee_id: str, work_date: date, check_in_time: time, shift_id) -> AttendanceRecord:
        existing = self.get_for_employee_and_date(employee_id, work_date)
        if existing:
            return existing
        self._id += 1
        return self.add(
            AttendanceRecord(
                record_id=self._id,
                employee_id=employee_id,
                work_date=work_date,
                status=AttendanceStatus.CHECKED_IN,
                shift_id=shift_id,
                check_in_time=check_in_time,
            )
        )

    def update_checkout(self, *, record_id: int, check_out_time: time, working_hours: str, status, regularized=False) -> bool:
        rec = self.records.get(record_id)
        if rec is None or rec.check_out_time is not None:
            return False
        self.records[record_id] = replace(
            rec,
            check_out_time=check_out_time,
            working_hours=working_hours,
            status=status,
            regularized=regularized,
        )
        return True

    def count_regularized(self, employee_id: str, year: int, month: int) -> int:
        return sum(
            1
            for r in self.records.values()
            if r.employee_id == employee_id
            and r.regularized
            and r.work_date.year == year
            and r.work_date.month == month
        )


class InMemoryRequests:
    def __init__(self):
        self.requests: dict[int, CheckInRegularizationRequest] = {}
        self._id = 0

    def create(self, *, employee_id, employee_name, work_date, manager, reason, created_at):
        self._id += 1
        req = CheckInRegularizationRequest(
            request_id=self._id,
            employee_id=employee_id,
            employee_name=employee_name,
            work_date=work_date,
            manager=manager,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=created_at,
        )
        self.requests[req.request_id] = req
        return req

    def get_by_id(self, request_id: int):
        return self.requests.get(request_id)

    def find_pending(self, employee_id: str, work_date: date):
        for r in self.requests.values():
            if r.employee_id == employee_id and r.work_date == work_date and r.is_pending:
                return r
        return None

    def list_for_employee(self, employee_id: str, *, since):
        return [r for r in self.requests.values() if r.employee_id == employee_id and r.created_at >= since]

    def list_pending(self, *, since, manager=None):
        return [
            r
            for r in self.requests.values()
            if r.is_pending and r.created_at >= since and (manager is None or r.manager == manager)
        ]

    def decide(self, *, request_id, status, decided_by, decided_at, approver_comments=None) -> bool:
        req = self.requests.get(request_id)
        if req is None or not req.is_pending:
            return False
        self.requests[request_id] = replace(
            req, status=status, decided_by=decided_by, decided_at=decided_at, approver_comments=approver_comments
        )
        return True


GENERAL = Shift(shift_id=1, shift_name="General", start_time=time(9, 0), end_time=time(18, 0), time_zone="UTC")
NIGHT = Shift(shift_id=2, shift_name="Night", start_time=time(22, 0), end_time=time(7, 0), time_zone="UTC")
KOLKATA = Shift(shift_id=3, shift_name="India Day", start_time=time(9, 0), end_time=time(18, 0), time_zone="Asia/Kolkata")
TORONTO = Shift(shift_id=4, shift_name="Toronto Day", start_time=time(9, 0), end_time=time(17, 0), time_zone="America/Toronto")


@pytest.fixture(autouse=True)
def _clear_zone_cache():
    resolve_zone.cache_clear()
    yield
    resolve_zone.cache_clear()


@pytest.fixture
def settings() -> AttendanceSettings:
    return AttendanceSettings()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def shifts_repo() -> InMemoryShifts:
    return InMemoryShifts([GENERAL, NIGHT, KOLKATA, TORONTO])


@pytest.fixture
def requests_repo() -> InMemoryRequests:
    return InMemoryRequests()


@pytest.fixture
def services(attendance_repo, shifts_repo, requests_repo, settings):
    return build_services(attendance_repo, shifts_repo, requests_repo, settings=settings)
