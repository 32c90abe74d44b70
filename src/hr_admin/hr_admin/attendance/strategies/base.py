from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StatusDecision:
    status: str
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide(self, *, time_in: Optional[str], time_out: Optional[str], leave_type: Optional[str]) -> StatusDecision:
        raise NotImplementedError
