from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.clock import parse_clock_minutes
from .classifier import classify


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day.

    ``status`` is derived on every read and never stored.
    """

    attendance_id: int
    user_id: int
    work_date: date
    time_in: Optional[str]
    time_out: Optional[str]
    leave_type: Optional[str] = None
    remarks: Optional[str] = None
    employee_name: Optional[str] = None

    @property
    def status(self) -> str:
        return classify(self.time_in, self.time_out, self.leave_type)

    @property
    def duration_minutes(self) -> Optional[int]:
        if not self.time_in or not self.time_out:
            return None
        try:
            return parse_clock_minutes(self.time_out) - parse_clock_minutes(self.time_in)
        except ValueError:
            return None
