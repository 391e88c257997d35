from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import format_record_date, now_utc, parse_record_date
from ..common.http import json_errors, ok, request_value
from ..container import Container
from .model import CheckInRegularizationRequest


def _serialize(req: CheckInRegularizationRequest) -> dict:
    return {
        "Id": req.request_id,
        "EmployeeId": req.employee_id,
        "EmployeeName": req.employee_name,
        "Date": format_record_date(req.work_date),
        "Manager": req.manager,
        "Reason": req.reason,
        "Status": req.status.value,
        "Created": req.created_at.isoformat() if req.created_at else None,
        "DecidedBy": req.decided_by,
        "ApproverComments": req.approver_comments,
    }


def register(app: Flask, container: Container) -> None:
    service = container.request_service

    @app.route("/api/employees/<employee_id>/regularization-requests", methods=["POST"], endpoint="submit_regularization_request")
    @json_errors
    def submit_regularization_request(employee_id: str):
        work_date = request_value("date")
        created = service.submit(
            employee_id=employee_id,
            employee_name=request_value("employee_name") or "",
            reason=request_value("reason") or "",
            manager=request_value("manager"),
            work_date=parse_record_date(work_date) if work_date else None,
            now=now_utc(),
        )
        return ok("Your check-in regularization request has been submitted", 201, request=_serialize(created))

    @app.route("/api/employees/<employee_id>/regularization-requests", methods=["GET"], endpoint="regularization_request_history")
    @json_errors
    def regularization_request_history(employee_id: str):
        rows = service.history(employee_id, now=now_utc())
        return ok(requests=[_serialize(r) for r in rows])

    @app.route("/api/regularization-requests/pending", methods=["GET"], endpoint="pending_regularization_requests")
    @json_errors
    def pending_regularization_requests():
        rows = service.pending(manager=request.args.get("manager") or None, now=now_utc())
        return ok(requests=[_serialize(r) for r in rows])

    @app.route("/api/regularization-requests/<int:request_id>/approve", methods=["POST"], endpoint="approve_regularization_request")
    @json_errors
    def approve_regularization_request(request_id: int):
        decided = service.approve(
            request_id,
            approver=request_value("approver") or "",
            comments=request_value("comments") or "",
            now=now_utc(),
        )
        return ok("Request approved", request=_serialize(decided))

    @app.route("/api/regularization-requests/<int:request_id>/reject", methods=["POST"], endpoint="reject_regularization_request")
    @json_errors
    def reject_regularization_request(request_id: int):
        decided = service.reject(
            request_id,
            approver=request_value("approver") or "",
            comments=request_value("comments") or "",
            now=now_utc(),
        )
        return ok("Request rejected", request=_serialize(decided))
