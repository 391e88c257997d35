from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..common.datetime_utils import elapsed_minutes, format_duration, parse_wall_clock
from ..core.exceptions import ValidationError
from ..shifts.model import Shift
from ..shifts.timezone import normalize_instant
from ..shifts.window import ShiftWindowResolver
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, CheckoutOutcome


class WorkDurationCalculator:
    """Actual vs. effective worked time for a record, and the resulting status.

    Shared by ordinary checkout and regularization so both classify the same
    way.
    """

    def __init__(self, resolver: ShiftWindowResolver, strategy_factory: AttendanceStrategyFactory):
        self._resolver = resolver
        self._factory = strategy_factory

    def zone_for(self, shift: Optional[Shift]) -> ZoneInfo:
        if shift is None:
            return self._resolver.projector.zone_for(None)
        return self._resolver.zone_for(shift)

    def actual_start(self, record: AttendanceRecord, shift: Optional[Shift]) -> datetime:
        """Check-in instant of ``record`` in the shift's zone.

        An overnight shift keeps the day it started on as ``work_date``, so a
        check-in taken after midnight lies on the following calendar day.
        """

        if record.check_in_time is None:
            raise ValidationError("Record has no check-in time")
        start = datetime.combine(record.work_date, record.check_in_time, tzinfo=self.zone_for(shift))
        if shift is not None and shift.is_overnight:
            window = self._resolver.resolve_window(shift, record.work_date)
            if start < window.check_in_open:
                start = datetime.combine(
                    record.work_date + timedelta(days=1), record.check_in_time, tzinfo=self.zone_for(shift)
                )
        return start

    def compute_checkout(self, record: AttendanceRecord, shift: Optional[Shift], end: datetime) -> CheckoutOutcome:
        """Close ``record`` at instant ``end``.

        ``working_hours`` shows the raw elapsed time; the status is decided on
        the part of it that overlaps the scheduled shift.
        """

        if not record.is_open:
            raise ValidationError("No open check-in to close for this record")

        end_local = normalize_instant(end).astimezone(self.zone_for(shift))
        check_out_time = end_local.time().replace(second=0, microsecond=0)
        start = self.actual_start(record, shift)

        actual = elapsed_minutes(start, end_local)
        if shift is not None:
            window = self._resolver.resolve_window(shift, record.work_date)
            effective = window.intersect_minutes(start, end_local)
        else:
            effective = actual

        strategy = self._factory.for_checkout(check_in_time=record.check_in_time, check_out_time=check_out_time)
        decision = strategy.decide_checkout(effective_minutes=effective, current=record.status)

        return CheckoutOutcome(
            check_out_time=check_out_time,
            working_hours=decision.working_hours or format_duration(actual),
            actual_minutes=actual,
            effective_minutes=effective,
            status=decision.status,
        )


def duration_between(work_date: date, start: Union[str, time], end: Union[str, time]) -> str:
    """HH:MM between two wall-clock times on ``work_date``.

    An end earlier than the start is read as the next day.
    """

    start_dt = datetime.combine(work_date, parse_wall_clock(start))
    end_dt = datetime.combine(work_date, parse_wall_clock(end))
    if end_dt < start_dt:
        end_dt += timedelta(days=1)
    return format_duration(int((end_dt - start_dt).total_seconds()) // 60)
