from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """Domain entity: a work shift.

    ``start_time``/``end_time`` are wall-clock times in ``time_zone``. An end
    at or before the start means the shift crosses midnight.
    """

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time
    time_zone: Optional[str] = None

    @property
    def is_overnight(self) -> bool:
        return self.end_time <= self.start_time
