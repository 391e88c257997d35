from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import month_bounds, now_utc, parse_record_date
from ..common.http import json_errors, ok, request_value, serialize_record, serialize_state
from ..container import Container


def register(app: Flask, container: Container) -> None:
    processor = container.processor

    @app.route("/api/employees/<employee_id>/attendance/state", methods=["GET"], endpoint="attendance_state")
    @json_errors
    def attendance_state(employee_id: str):
        now = now_utc()
        shift = processor.get_shift(request_value("shift_id"))
        record = processor.current_record(employee_id, shift, now=now) if shift else None
        result = container.state_resolver.resolve(shift, now, record)
        return ok(
            result.message,
            **serialize_state(result),
            record=serialize_record(record),
            elapsed=processor.elapsed(record, shift, now=now),
            can_check_out=processor.can_check_out(record, shift, now=now),
        )

    @app.route("/api/employees/<employee_id>/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @json_errors
    def attendance_checkin(employee_id: str):
        record = processor.check_in(employee_id, request_value("shift_id"), now=now_utc())
        return ok("Checked in", 201, record=serialize_record(record))

    @app.route("/api/employees/<employee_id>/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    @json_errors
    def attendance_checkout(employee_id: str):
        now = now_utc()
        shift = processor.get_shift(request_value("shift_id"))
        record = processor.current_record(employee_id, shift, now=now)
        updated = processor.check_out(record, shift, now=now)
        return ok("Checked out", record=serialize_record(updated))

    @app.route("/api/employees/<employee_id>/attendance/history", methods=["GET"], endpoint="attendance_history")
    @json_errors
    def attendance_history(employee_id: str):
        first, last = month_bounds(processor.local_now(None, now_utc()).date())
        start = parse_record_date(request.args.get("start") or first)
        end = parse_record_date(request.args.get("end") or last)
        records = processor.history(employee_id, start, end)
        return ok(records=[serialize_record(r) for r in records])

    @app.route("/api/employees/<employee_id>/attendance/missed", methods=["GET"], endpoint="attendance_missed")
    @json_errors
    def attendance_missed(employee_id: str):
        today = processor.local_now(None, now_utc()).date()
        records = processor.missed_checkouts(employee_id, today)
        return ok(records=[serialize_record(r) for r in records])
