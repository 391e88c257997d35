from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import format_12h
from ..common.http import json_errors, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts", methods=["GET"], endpoint="list_shifts")
    @json_errors
    def list_shifts():
        shifts = [
            {
                "id": s.shift_id,
                "name": s.shift_name,
                "start_time": format_12h(s.start_time),
                "end_time": format_12h(s.end_time),
                "time_zone": str(container.window_resolver.zone_for(s)),
                "overnight": s.is_overnight,
            }
            for s in container.shifts_repo.list_all()
        ]
        return ok(shifts=shifts)
