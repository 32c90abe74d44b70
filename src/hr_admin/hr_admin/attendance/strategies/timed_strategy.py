from __future__ import annotations

from typing import Optional

from ...common.clock import parse_clock_minutes
from ...core.constants import EARLY_OUT_MINUTES, HALF_DAY_MAX_MINUTES, LATE_IN_CUTOFF
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class TimedStrategy(AttendanceStrategy):
    """Both punches present: compare time-in and duration against the cutoffs.

    There is no on-time/full-shift label; such a day falls through to Absent.
    """

    def __init__(
        self,
        *,
        late_cutoff: str = LATE_IN_CUTOFF,
        early_out_minutes: int = EARLY_OUT_MINUTES,
        half_day_max_minutes: int = HALF_DAY_MAX_MINUTES,
    ):
        self._late_cutoff = parse_clock_minutes(late_cutoff)
        self._early_out_minutes = int(early_out_minutes)
        self._half_day_max_minutes = int(half_day_max_minutes)

    def decide(self, *, time_in: Optional[str], time_out: Optional[str], leave_type: Optional[str]) -> StatusDecision:
        try:
            in_minutes = parse_clock_minutes(time_in)
            out_minutes = parse_clock_minutes(time_out)
        except ValueError:
            return StatusDecision(status=AttendanceStatus.ABSENT.value, note="Unreadable punch time")

        duration = out_minutes - in_minutes
        is_late_in = in_minutes > self._late_cutoff
        is_early_out = duration < self._early_out_minutes

        if is_late_in and is_early_out:
            return StatusDecision(status=AttendanceStatus.LATE_IN_EARLY_OUT.value)
        if is_late_in:
            return StatusDecision(status=AttendanceStatus.LATE_IN.value)
        if is_early_out:
            return StatusDecision(status=AttendanceStatus.EARLY_OUT.value)
        if self._early_out_minutes <= duration < self._half_day_max_minutes:
            return StatusDecision(status=AttendanceStatus.HALF_DAY.value)
        return StatusDecision(status=AttendanceStatus.ABSENT.value)
