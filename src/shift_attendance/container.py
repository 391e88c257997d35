from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import CheckInOutProcessor
from .attendance.state import AttendanceStateResolver
from .core.settings import AttendanceSettings
from .database.connection import DatabaseConnection, DBConfig
from .regularization.service import RegularizationEngine
from .requests.mysql_request_repository import MySQLRegularizationRequestRepository
from .requests.repository import RegularizationRequestRepository
from .requests.service import RegularizationRequestService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.timezone import TimeZoneProjector
from .shifts.window import ShiftWindowResolver


@dataclass(frozen=True)
class Container:
    settings: AttendanceSettings

    attendance_repo: AttendanceRepository
    shifts_repo: ShiftRepository
    requests_repo: RegularizationRequestRepository

    window_resolver: ShiftWindowResolver
    state_resolver: AttendanceStateResolver
    processor: CheckInOutProcessor
    regularization: RegularizationEngine
    request_service: RegularizationRequestService


def build_services(
    attendance_repo: AttendanceRepository,
    shifts_repo: ShiftRepository,
    requests_repo: RegularizationRequestRepository,
    *,
    settings: Optional[AttendanceSettings] = None,
) -> Container:
    """Wire the engine around any set of repositories."""

    settings = settings or AttendanceSettings()
    projector = TimeZoneProjector(settings.default_time_zone)
    window_resolver = ShiftWindowResolver(settings, projector)
    state_resolver = AttendanceStateResolver(settings, window_resolver)
    processor = CheckInOutProcessor(
        attendance_repo,
        shifts_repo,
        settings=settings,
        resolver=window_resolver,
        strategy_factory=AttendanceStrategyFactory(settings.thresholds),
        state_resolver=state_resolver,
    )
    return Container(
        settings=settings,
        attendance_repo=attendance_repo,
        shifts_repo=shifts_repo,
        requests_repo=requests_repo,
        window_resolver=window_resolver,
        state_resolver=state_resolver,
        processor=processor,
        regularization=RegularizationEngine(
            attendance_repo,
            settings=settings,
            resolver=window_resolver,
            calculator=processor.calculator,
        ),
        request_service=RegularizationRequestService(requests_repo, settings=settings, projector=projector),
    )


def build_container(*, db_config: dict, settings: Optional[AttendanceSettings] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        MySQLAttendanceRepository(conn),
        MySQLShiftRepository(conn),
        MySQLRegularizationRequestRepository(conn),
        settings=settings,
    )
