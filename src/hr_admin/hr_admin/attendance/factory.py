from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.leave_strategy import LeaveStrategy
from .strategies.timed_strategy import TimedStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Precedence: leave type, then missing punches, then the timing rules.
    """

    timed: AttendanceStrategy = field(default_factory=TimedStrategy)

    def for_punches(self, *, time_in: Optional[str], time_out: Optional[str], leave_type: Optional[str]) -> AttendanceStrategy:
        if leave_type:
            return LeaveStrategy()
        if not time_in or not time_out:
            return AbsentStrategy()
        return self.timed
