from __future__ import annotations

from enum import Enum
from typing import Optional

from .exceptions import ValidationError


class AttendanceStatus(str, Enum):
    """Day status as stored on an attendance record."""

    PRESENT = "Present"
    HALF_DAY = "Half Day"
    ABSENT = "Absent"
    HOLIDAY = "Holiday"
    LEAVE = "Leave"
    CHECKED_IN = "IN"

    @classmethod
    def parse(cls, value: Optional[str]) -> "AttendanceStatus":
        """Map the store's free-form status text onto the closed set.

        Blank means Present (store default). Legacy punctuality labels written
        by older clients ("On Time", "Late") also count as Present.
        """

        text = (value or "").strip().lower()
        if not text:
            return cls.PRESENT
        if text in {"in", "checked in"}:
            return cls.CHECKED_IN
        if text in {"half day", "half-day", "halfday"}:
            return cls.HALF_DAY
        if "leave" in text:
            return cls.LEAVE
        if text in {"present", "on time", "late"}:
            return cls.PRESENT
        if text == "absent":
            return cls.ABSENT
        if text == "holiday":
            return cls.HOLIDAY
        raise ValidationError(f"Unknown attendance status: {value!r}")


class AttendanceState(str, Enum):
    """What the attendance screen should offer right now."""

    WEEKEND = "WEEKEND"
    HOLIDAY = "HOLIDAY"
    ON_LEAVE = "ON_LEAVE"
    ABSENT = "ABSENT"
    COMPLETED = "COMPLETED"
    ACTIVE = "ACTIVE"
    UPCOMING = "UPCOMING"
    CLOSED = "CLOSED"
    LOADING = "LOADING"


class RequestStatus(str, Enum):
    """Lifecycle of a check-in regularization request."""

    PENDING = "Pending Manager Approval"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @classmethod
    def parse(cls, value: Optional[str]) -> "RequestStatus":
        text = (value or "").strip().lower()
        if text in {"pending", "pending manager approval"}:
            return cls.PENDING
        if text == "approved":
            return cls.APPROVED
        if text == "rejected":
            return cls.REJECTED
        raise ValidationError(f"Unknown request status: {value!r}")
