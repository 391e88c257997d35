from __future__ import annotations

from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Mapping, Union

from . import constants


@dataclass(frozen=True)
class StatusThresholds:
    """Effective-hours cut-offs used to classify a worked day.

    Below ``absent_below_hours`` is Absent, below ``half_day_below_hours`` is
    Half Day, anything else is Present.
    """

    absent_below_hours: float = constants.ABSENT_BELOW_HOURS
    half_day_below_hours: float = constants.HALF_DAY_BELOW_HOURS

    def __post_init__(self):
        if self.absent_below_hours < 0 or self.half_day_below_hours < self.absent_below_hours:
            raise ValueError("Status thresholds must satisfy 0 <= absent <= half day")


@dataclass(frozen=True)
class AttendanceSettings:
    """Engine configuration passed explicitly into every component."""

    check_in_window_minutes: int = constants.CHECK_IN_WINDOW_MINUTES
    check_out_window_minutes: int = constants.CHECK_OUT_WINDOW_MINUTES
    min_work_duration_minutes: int = constants.MIN_WORK_DURATION_MINUTES
    regularization_monthly_quota: int = constants.REGULARIZATION_MONTHLY_QUOTA
    default_time_zone: str = constants.DEFAULT_TIME_ZONE
    thresholds: StatusThresholds = field(default_factory=StatusThresholds)

    @classmethod
    def from_settings(cls, settings: Union[ModuleType, Mapping[str, Any]]) -> "AttendanceSettings":
        """Build from a config module (``config.development`` ...) or a dict."""

        def get(name: str, default):
            if isinstance(settings, Mapping):
                return settings.get(name, default)
            return getattr(settings, name, default)

        return cls(
            check_in_window_minutes=int(get("CHECK_IN_WINDOW_MINUTES", constants.CHECK_IN_WINDOW_MINUTES)),
            check_out_window_minutes=int(get("CHECK_OUT_WINDOW_MINUTES", constants.CHECK_OUT_WINDOW_MINUTES)),
            min_work_duration_minutes=int(get("MIN_WORK_DURATION_MINUTES", constants.MIN_WORK_DURATION_MINUTES)),
            regularization_monthly_quota=int(
                get("REGULARIZATION_MONTHLY_QUOTA", constants.REGULARIZATION_MONTHLY_QUOTA)
            ),
            default_time_zone=str(get("DEFAULT_TIME_ZONE", constants.DEFAULT_TIME_ZONE) or constants.DEFAULT_TIME_ZONE),
            thresholds=StatusThresholds(
                absent_below_hours=float(get("ABSENT_BELOW_HOURS", constants.ABSENT_BELOW_HOURS)),
                half_day_below_hours=float(get("HALF_DAY_BELOW_HOURS", constants.HALF_DAY_BELOW_HOURS)),
            ),
        )
