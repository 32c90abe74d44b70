from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveApplication:
    application_id: int
    user_id: int
    leave_type: str
    start_date: date
    end_date: date
    total_days: int
    reason: str
    status: LeaveStatus
    last_day_to_work: Optional[date] = None
    return_to_work: Optional[date] = None
    comments: Optional[str] = None
    employee_name: Optional[str] = None


@dataclass(frozen=True)
class LeaveBalance:
    """Entitlement for one leave type; ``remaining`` may go negative."""

    type: str
    total: int
    used: int = 0

    @property
    def remaining(self) -> int:
        return self.total - self.used
