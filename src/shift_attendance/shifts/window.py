from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..common.datetime_utils import elapsed_minutes
from ..core.settings import AttendanceSettings
from .model import Shift
from .timezone import TimeZoneProjector


@dataclass(frozen=True)
class ShiftWindow:
    """One occurrence of a shift, as wall-clock instants in the shift's zone."""

    shift_start: datetime
    shift_end: datetime
    check_in_open: datetime
    check_out_close: datetime
    time_zone: ZoneInfo

    def contains(self, instant: datetime) -> bool:
        """True when ``instant`` lies in [check_in_open, check_out_close]."""

        local = instant.astimezone(self.time_zone)
        return self.check_in_open <= local <= self.check_out_close

    def intersect_minutes(self, start: datetime, end: datetime) -> int:
        """Minutes of [start, end] that fall inside [shift_start, shift_end]."""

        lo = max(start.astimezone(self.time_zone), self.shift_start)
        hi = min(end.astimezone(self.time_zone), self.shift_end)
        return elapsed_minutes(lo, hi)


class ShiftWindowResolver:
    def __init__(self, settings: Optional[AttendanceSettings] = None, projector: Optional[TimeZoneProjector] = None):
        self._settings = settings or AttendanceSettings()
        self._projector = projector or TimeZoneProjector(self._settings.default_time_zone)

    @property
    def projector(self) -> TimeZoneProjector:
        return self._projector

    def zone_for(self, shift: Shift) -> ZoneInfo:
        return self._projector.zone_for(shift.time_zone)

    def resolve_window(self, shift: Shift, reference: Union[datetime, date]) -> ShiftWindow:
        """Compute the shift occurrence anchored on ``reference``'s calendar day.

        ``reference`` is either an instant (projected into the shift's zone
        first) or a date that is already zone-local.
        """

        zone = self.zone_for(shift)
        if isinstance(reference, datetime):
            day = self._projector.project(reference, shift.time_zone).date()
        else:
            day = reference

        shift_start = datetime.combine(day, shift.start_time, tzinfo=zone)
        shift_end = datetime.combine(day, shift.end_time, tzinfo=zone)
        if shift_end <= shift_start:
            shift_end += timedelta(days=1)

        return ShiftWindow(
            shift_start=shift_start,
            shift_end=shift_end,
            check_in_open=shift_start - timedelta(minutes=self._settings.check_in_window_minutes),
            check_out_close=shift_end + timedelta(minutes=self._settings.check_out_window_minutes),
            time_zone=zone,
        )
