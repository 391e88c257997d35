from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_utc
from ..common.http import json_errors, ok, serialize_record
from ..common.validators import require_positive_int
from ..container import Container
from ..core.exceptions import RecordNotFoundError, ValidationError


def register(app: Flask, container: Container) -> None:
    engine = container.regularization

    @app.route("/api/employees/<employee_id>/regularizations/usage", methods=["GET"], endpoint="regularization_usage")
    @json_errors
    def regularization_usage(employee_id: str):
        today = container.processor.local_now(None, now_utc()).date()
        year = require_positive_int(request.args.get("year") or today.year, "Year")
        month = require_positive_int(request.args.get("month") or today.month, "Month")
        if month > 12:
            raise ValidationError("Month must be between 1 and 12")
        return ok(
            used=engine.used_this_month(employee_id, year, month),
            remaining=engine.remaining_this_month(employee_id, year, month),
            quota=engine.quota,
        )

    @app.route("/api/attendance/<int:record_id>/regularize", methods=["POST"], endpoint="regularize_record")
    @json_errors
    def regularize_record(record_id: int):
        record = container.attendance_repo.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError("Attendance record not found")
        shift = container.shifts_repo.get_by_id(record.shift_id) if record.shift_id else None
        updated = engine.regularize(record, shift)
        return ok("Attendance regularized", record=serialize_record(updated))
