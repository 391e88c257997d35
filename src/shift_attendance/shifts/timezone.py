from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_TIME_ZONE, FALLBACK_TIME_ZONE

logger = logging.getLogger("shift_attendance.timezone")


@lru_cache(maxsize=64)
def resolve_zone(name: str) -> ZoneInfo:
    """Look up an IANA zone, falling back to UTC on unknown names.

    A bad shift configuration must not block attendance, so this never raises.
    """

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("invalid_time_zone_fallback_utc", extra={"time_zone": name})
        return ZoneInfo(FALLBACK_TIME_ZONE)


def normalize_instant(instant: datetime) -> datetime:
    """Make an instant timezone-aware; naive values are taken as UTC."""

    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


class TimeZoneProjector:
    """Projects absolute instants onto the wall clock of a named zone."""

    def __init__(self, default_zone: str = DEFAULT_TIME_ZONE):
        self._default_zone = default_zone

    def zone_for(self, name: Optional[str]) -> ZoneInfo:
        raw = (name or "").strip() or self._default_zone
        return resolve_zone(raw)

    def project(self, instant: datetime, zone: Optional[str]) -> datetime:
        """Return ``instant`` as an aware datetime in ``zone``.

        Its year/month/day/hour/minute are the wall-clock components in that
        zone.
        """

        return normalize_instant(instant).astimezone(self.zone_for(zone))

    def local_date(self, instant: datetime, zone: Optional[str]) -> date:
        return self.project(instant, zone).date()
