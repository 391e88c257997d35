from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from ..core.constants import DATE_FORMAT, TIME_FORMAT_12H
from ..core.exceptions import ValidationError

logger = logging.getLogger("shift_attendance.datetime")

_WALL_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])?$")
_PLACEHOLDERS = {"", "-", "--", "--:--"}


def now_utc() -> datetime:
    """Current instant (UTC).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def parse_record_date(value: Union[str, date]) -> date:
    """Parse a stored calendar date: DD/MM/YYYY, or ISO YYYY-MM-DD."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = (value or "").strip()
    fmt = DATE_FORMAT if "/" in text else "%Y-%m-%d"
    try:
        return datetime.strptime(text, fmt).date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}")


def format_record_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_wall_clock(value: Union[str, time, None]) -> time:
    """Parse "HH:MM" (24h) or "H:MM AM/PM" (12h) into a time.

    Never raises: placeholders and malformed text resolve to midnight.
    """

    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    text = (value or "").replace("\u202f", " ").strip()
    if text in _PLACEHOLDERS:
        return time(0, 0)

    match = _WALL_CLOCK_RE.match(text)
    if not match:
        logger.warning("unparseable_wall_clock", extra={"value": text})
        return time(0, 0)

    hours = int(match.group(1))
    minutes = int(match.group(2))
    modifier = (match.group(4) or "").upper()

    if modifier:
        if hours == 12 and modifier == "AM":
            hours = 0
        elif hours < 12 and modifier == "PM":
            hours += 12

    if hours > 23 or minutes > 59:
        logger.warning("out_of_range_wall_clock", extra={"value": text})
        return time(0, 0)
    return time(hours, minutes)


def parse_optional_wall_clock(value: Union[str, time, None]) -> Optional[time]:
    """Like parse_wall_clock, but a missing value stays missing."""

    if value is None:
        return None
    if isinstance(value, str) and value.strip() in _PLACEHOLDERS:
        return None
    return parse_wall_clock(value)


def format_12h(value: time) -> str:
    """Render a wall-clock time the way records store it, e.g. "06:00 PM"."""
    return value.strftime(TIME_FORMAT_12H)


def format_duration(minutes: int) -> str:
    """HH:MM, zero padded; negatives clamp to 00:00."""
    minutes = max(int(minutes), 0)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_elapsed(seconds: int) -> str:
    seconds = max(int(seconds), 0)
    return f"{seconds // 3600:02d}:{(seconds % 3600) // 60:02d}:{seconds % 60:02d}"


def elapsed_seconds(start: datetime, end: datetime) -> int:
    """Absolute elapsed time between two aware instants, clamped at zero.

    Both sides go through UTC so DST transitions inside the span count.
    """

    delta = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
    return max(int(delta.total_seconds()), 0)


def elapsed_minutes(start: datetime, end: datetime) -> int:
    return elapsed_seconds(start, end) // 60


def month_bounds(day: date) -> tuple[date, date]:
    """First and last calendar day of the month containing ``day``."""

    first = day.replace(day=1)
    next_first = (first + timedelta(days=32)).replace(day=1)
    return first, next_first - timedelta(days=1)
