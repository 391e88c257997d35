from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..attendance.calculator import duration_between
from ..attendance.codec import record_to_row
from ..attendance.model import AttendanceRecord, StateResult
from ..core.exceptions import DomainError, RecordNotFoundError, RegularizationQuotaExceeded

logger = logging.getLogger("shift_attendance.http")


def ok(message: str = "", status: int = 200, **data: Any):
    return jsonify({"success": True, "message": message, **data}), status


def fail(message: str, status: int, **data: Any):
    return jsonify({"success": False, "message": message, **data}), status


def json_errors(view):
    """Turn domain errors raised by a view into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except RegularizationQuotaExceeded as e:
            return fail(str(e), 409, used=e.used, quota=e.quota)
        except RecordNotFoundError as e:
            return fail(str(e), 404)
        except DomainError as e:
            return fail(str(e), 400)
        except Exception:
            logger.exception("unhandled_request_error", extra={"path": request.path})
            return fail("Unexpected server error", 500)

    return wrapper


def request_value(name: str) -> Optional[Any]:
    """Look ``name`` up in the JSON body first, then the query string."""

    body = request.get_json(silent=True) or {}
    if isinstance(body, dict) and body.get(name) not in (None, ""):
        return body.get(name)
    value = request.args.get(name)
    return value if value not in (None, "") else None


def serialize_record(record: Optional[AttendanceRecord]) -> Optional[dict]:
    if record is None:
        return None
    row = record_to_row(record)
    # Rows entered by hand can be closed without stored hours.
    if row["WorkingHours"] is None and record.check_in_time is not None and record.check_out_time is not None:
        row["WorkingHours"] = duration_between(record.work_date, record.check_in_time, record.check_out_time)
    return row


def serialize_state(result: StateResult) -> dict:
    data: dict[str, Any] = {
        "state": result.state.value,
        "time_zone": result.time_zone,
        "minutes_until_open": result.minutes_until_open,
        "window": None,
    }
    if result.window is not None:
        data["window"] = {
            "shift_start": result.window.shift_start.isoformat(),
            "shift_end": result.window.shift_end.isoformat(),
            "check_in_open": result.window.check_in_open.isoformat(),
            "check_out_close": result.window.check_out_close.isoformat(),
        }
    return data
