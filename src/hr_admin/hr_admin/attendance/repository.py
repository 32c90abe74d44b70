from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_all(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records of every employee, joined with the employee name."""

        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        time_in: Optional[str],
        time_out: Optional[str],
        leave_type: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        attendance_id: int,
        time_in: Optional[str],
        time_out: Optional[str],
        leave_type: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError
