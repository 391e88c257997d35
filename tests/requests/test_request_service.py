from datetime import date, datetime, timezone

import pytest

from shift_attendance.core.enums import RequestStatus
from shift_attendance.core.exceptions import RecordNotFoundError, ValidationError


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def _submit(services, employee_id="E1", now=None, **kwargs):
    kwargs.setdefault("employee_name", "Asha Rao")
    kwargs.setdefault("reason", "Forgot to check in")
    return services.request_service.submit(employee_id=employee_id, now=now or utc(2025, 1, 6, 8, 30), **kwargs)


def test_submit_defaults(services):
    # 20:00 UTC is already the next day in Asia/Kolkata.
    req = _submit(services, now=utc(2025, 1, 6, 20, 0))

    assert req.status is RequestStatus.PENDING
    assert req.manager == "Not Assigned"
    assert req.work_date == date(2025, 1, 7)
    assert req.decided_by is None


def test_submit_keeps_manager_and_date(services):
    req = _submit(services, manager="  M. Iyer ", work_date=date(2025, 1, 3))

    assert req.manager == "M. Iyer"
    assert req.work_date == date(2025, 1, 3)


@pytest.mark.parametrize("field", ["reason", "employee_name"])
def test_submit_requires_text(services, requests_repo, field):
    with pytest.raises(ValidationError):
        _submit(services, **{field: "   "})
    assert requests_repo.requests == {}


def test_second_pending_request_for_same_day_is_refused(services):
    _submit(services)

    with pytest.raises(ValidationError, match="already pending"):
        _submit(services, reason="Again")


def test_new_request_allowed_once_previous_is_decided(services):
    first = _submit(services)
    services.request_service.reject(first.request_id, approver="M. Iyer", now=utc(2025, 1, 6, 9, 0))

    second = _submit(services, reason="Badge reader was down")

    assert second.request_id != first.request_id
    assert second.is_pending


def test_history_covers_current_month_newest_first(services):
    # Kolkata month starts at 2024-12-31 18:30 UTC.
    _submit(services, now=utc(2024, 12, 31, 12, 0), work_date=date(2024, 12, 31))
    early = _submit(services, now=utc(2024, 12, 31, 19, 0), work_date=date(2025, 1, 1))
    late = _submit(services, now=utc(2025, 1, 5, 10, 0), work_date=date(2025, 1, 5))
    _submit(services, employee_id="E2", now=utc(2025, 1, 5, 11, 0))

    rows = services.request_service.history("E1", now=utc(2025, 1, 6, 8, 30))

    assert [r.request_id for r in rows] == [late.request_id, early.request_id]


def test_pending_filters_by_manager_and_skips_decided(services):
    a = _submit(services, employee_id="E1", manager="M. Iyer", now=utc(2025, 1, 2, 9, 0))
    b = _submit(services, employee_id="E2", manager="M. Iyer", now=utc(2025, 1, 3, 9, 0))
    c = _submit(services, employee_id="E3", manager="K. Das", now=utc(2025, 1, 4, 9, 0))
    services.request_service.approve(a.request_id, approver="M. Iyer", now=utc(2025, 1, 5, 9, 0))

    mine = services.request_service.pending(manager="M. Iyer", now=utc(2025, 1, 6, 8, 30))
    everyone = services.request_service.pending(now=utc(2025, 1, 6, 8, 30))

    assert [r.request_id for r in mine] == [b.request_id]
    assert [r.request_id for r in everyone] == [c.request_id, b.request_id]


def test_approve_records_decision(services):
    req = _submit(services)
    decided_at = utc(2025, 1, 6, 10, 0)

    out = services.request_service.approve(req.request_id, approver="M. Iyer", comments=" ok ", now=decided_at)

    assert out.status is RequestStatus.APPROVED
    assert out.decided_by == "M. Iyer"
    assert out.decided_at == decided_at
    assert out.approver_comments == "ok"


def test_reject_without_comments(services):
    req = _submit(services)

    out = services.request_service.reject(req.request_id, approver="M. Iyer", now=utc(2025, 1, 6, 10, 0))

    assert out.status is RequestStatus.REJECTED
    assert out.approver_comments is None


def test_request_can_only_be_decided_once(services):
    req = _submit(services)
    services.request_service.approve(req.request_id, approver="M. Iyer")

    with pytest.raises(ValidationError, match="already been processed"):
        services.request_service.reject(req.request_id, approver="M. Iyer")


def test_decision_requires_approver(services):
    req = _submit(services)

    with pytest.raises(ValidationError, match="Approver is required"):
        services.request_service.approve(req.request_id, approver="")


def test_unknown_request(services):
    with pytest.raises(RecordNotFoundError):
        services.request_service.approve(99, approver="M. Iyer")
