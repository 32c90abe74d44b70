from __future__ import annotations

from typing import Optional

from .factory import AttendanceStrategyFactory
from .strategies.base import StatusDecision

_default_factory = AttendanceStrategyFactory()


def decide(
    time_in: Optional[str],
    time_out: Optional[str],
    leave_type: Optional[str] = None,
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> StatusDecision:
    factory = factory or _default_factory
    strategy = factory.for_punches(time_in=time_in, time_out=time_out, leave_type=leave_type)
    return strategy.decide(time_in=time_in, time_out=time_out, leave_type=leave_type)


def classify(time_in: Optional[str], time_out: Optional[str], leave_type: Optional[str] = None) -> str:
    """Status label for one day: the leave type, or a label from the punches."""
    return decide(time_in, time_out, leave_type).status
