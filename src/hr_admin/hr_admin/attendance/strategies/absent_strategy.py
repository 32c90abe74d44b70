from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """Missing time-in or time-out."""

    def decide(self, *, time_in: Optional[str], time_out: Optional[str], leave_type: Optional[str]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT.value, note="Missing punch")
