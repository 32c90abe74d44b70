from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveApplication


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        total_days: int,
        reason: str,
        last_day_to_work: Optional[date] = None,
        return_to_work: Optional[date] = None,
    ) -> int:
        raise NotImplementedError

    def get(self, *, application_id: int) -> Optional[LeaveApplication]:
        raise NotImplementedError

    def list_applications(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveApplication]:
        raise NotImplementedError

    def decide(
        self,
        *,
        application_id: int,
        status: LeaveStatus,
        comments: Optional[str] = None,
    ) -> bool:
        """Move a Pending application to ``status``; False when it is not Pending."""

        raise NotImplementedError
