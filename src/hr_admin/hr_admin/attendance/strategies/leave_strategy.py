from __future__ import annotations

from typing import Optional

from .base import AttendanceStrategy, StatusDecision


class LeaveStrategy(AttendanceStrategy):
    """A leave day takes the leave type as its status, whatever the punches say."""

    def decide(self, *, time_in: Optional[str], time_out: Optional[str], leave_type: Optional[str]) -> StatusDecision:
        return StatusDecision(status=str(leave_type))
