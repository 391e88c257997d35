import logging
from datetime import datetime, timezone

from shift_attendance.shifts.timezone import TimeZoneProjector, normalize_instant, resolve_zone


def test_unknown_zone_falls_back_to_utc_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="shift_attendance.timezone"):
        zone = resolve_zone("Mars/Olympus_Mons")

    assert str(zone) == "UTC"
    assert any(r.getMessage() == "invalid_time_zone_fallback_utc" for r in caplog.records)


def test_blank_zone_uses_configured_default():
    projector = TimeZoneProjector("Asia/Kolkata")

    assert str(projector.zone_for(None)) == "Asia/Kolkata"
    assert str(projector.zone_for("   ")) == "Asia/Kolkata"
    assert str(projector.zone_for("America/Toronto")) == "America/Toronto"


def test_project_gives_wall_clock_in_zone():
    projector = TimeZoneProjector("UTC")
    instant = datetime(2025, 1, 6, 3, 30, tzinfo=timezone.utc)

    local = projector.project(instant, "Asia/Kolkata")

    assert (local.hour, local.minute) == (9, 0)
    assert projector.local_date(datetime(2025, 1, 6, 20, 0, tzinfo=timezone.utc), "Asia/Kolkata").day == 7


def test_naive_instant_is_read_as_utc():
    naive = datetime(2025, 1, 6, 12, 0)

    assert normalize_instant(naive) == datetime(2025, 1, 6, 12, 0, tzinfo=timezone.utc)
