from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.clock import format_clock_minutes, parse_clock_minutes
from ..common.datetime_utils import today_local
from ..common.pagination import Page, all_of, contains_text, date_between, equals, paginate, this_week
from ..common.validators import optional_clock, require_choice
from ..core.constants import DEFAULT_LEAVE_ENTITLEMENTS, DEFAULT_PAGE_SIZE
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

STATUS_CSS = {
    AttendanceStatus.LATE_IN.value: "bg-yellow-400",
    AttendanceStatus.HALF_DAY.value: "bg-orange-400",
    AttendanceStatus.EARLY_OUT.value: "bg-pink-400",
    AttendanceStatus.LATE_IN_EARLY_OUT.value: "bg-red-400",
    AttendanceStatus.ABSENT.value: "bg-gray-400",
}
LEAVE_CSS = "bg-blue-400"


def summarize_statuses(records: Iterable[AttendanceRecord]) -> dict[str, int]:
    """Count records per derived status; every timing label is always present."""
    counts: dict[str, int] = {s.value: 0 for s in AttendanceStatus}
    counts.update(Counter(r.status for r in records))
    return counts


def to_row(r: AttendanceRecord) -> dict:
    minutes = r.duration_minutes
    status = r.status
    return {
        "attendance_id": r.attendance_id,
        "user_id": r.user_id,
        "employee_name": r.employee_name or "-",
        "date": r.work_date.strftime("%Y-%m-%d"),
        "time_in": r.time_in or "-",
        "time_out": r.time_out or "-",
        "total_time": format_clock_minutes(minutes) if minutes is not None and minutes >= 0 else "-",
        "status": status,
        "css_class": STATUS_CSS.get(status, LEAVE_CSS if r.leave_type else "bg-gray-400"),
        "remarks": r.remarks or "",
    }


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, *, leave_types: Optional[Sequence[str]] = None):
        self._attendance = attendance
        self._leave_types = list(leave_types or DEFAULT_LEAVE_ENTITLEMENTS)

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        search: str = "",
        only_this_week: bool = False,
        today: Optional[date] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[dict]:
        records = self._attendance.list_for_user(int(user_id), start_date=start, end_date=end)
        filters = [
            date_between(lambda r: r.work_date, start, end),
            contains_text(lambda r: r.status, search),
        ]
        if only_this_week:
            filters.append(this_week(lambda r: r.work_date, today or today_local()))

        result = paginate(all_of(*filters), records, page, page_size, sort_key=lambda r: r.work_date, reverse=True)
        return result.map(to_row)

    def list_all(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee: str = "",
        status: str = "All",
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[dict]:
        records = self._attendance.list_all(start_date=start, end_date=end)
        predicate = all_of(
            date_between(lambda r: r.work_date, start, end),
            contains_text(lambda r: r.employee_name, employee),
            equals(lambda r: r.status, status),
        )
        return paginate(
            predicate, records, page, page_size, sort_key=lambda r: (r.work_date, -r.user_id), reverse=True
        ).map(to_row)

    def overview(self, user_id: int, *, start: Optional[date] = None, end: Optional[date] = None) -> dict[str, int]:
        return summarize_statuses(self._attendance.list_for_user(int(user_id), start_date=start, end_date=end))

    @staticmethod
    def _check_punches(time_in: Optional[str], time_out: Optional[str]) -> tuple[Optional[str], Optional[str]]:
        t_in = optional_clock(time_in, "Time in")
        t_out = optional_clock(time_out, "Time out")
        if t_in and t_out and parse_clock_minutes(t_out) < parse_clock_minutes(t_in):
            raise ValidationError("Time out cannot be earlier than time in")
        return t_in, t_out

    def _check_leave_type(self, leave_type: Optional[str]) -> Optional[str]:
        v = (leave_type or "").strip()
        if not v:
            return None
        return require_choice(v, "Leave type", self._leave_types)

    def add_record(
        self,
        *,
        current_role: Role,
        user_id: int,
        work_date: date,
        time_in: str = "",
        time_out: str = "",
        leave_type: str = "",
        remarks: str = "",
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can add attendance")

        t_in, t_out = self._check_punches(time_in, time_out)
        if self._attendance.get_for_user_and_date(int(user_id), work_date):
            raise ValidationError("Attendance for this day already exists")

        attendance_id = self._attendance.create(
            user_id=int(user_id),
            work_date=work_date,
            time_in=t_in,
            time_out=t_out,
            leave_type=self._check_leave_type(leave_type),
            remarks=(remarks or "").strip() or None,
        )
        logger.info("Attendance %s added for user %s on %s", attendance_id, user_id, work_date)
        return attendance_id

    def edit_record(
        self,
        *,
        current_role: Role,
        attendance_id: int,
        time_in: str = "",
        time_out: str = "",
        leave_type: str = "",
        remarks: str = "",
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can edit attendance")

        rec = self._attendance.get_by_id(int(attendance_id))
        if not rec:
            raise NotFoundError("Attendance record not found")

        t_in, t_out = self._check_punches(time_in, time_out)
        ok = self._attendance.update(
            attendance_id=rec.attendance_id,
            time_in=t_in,
            time_out=t_out,
            leave_type=self._check_leave_type(leave_type),
            remarks=(remarks or "").strip() or rec.remarks,
        )
        if not ok:
            raise ValidationError("Updating attendance failed")
        logger.info("Attendance %s edited", attendance_id)

    def mark_absent(self, *, current_role: Role, user_id: int, work_date: date, remarks: str = "") -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can mark absences")

        note = (remarks or "").strip() or None
        rec = self._attendance.get_for_user_and_date(int(user_id), work_date)
        if rec:
            self._attendance.update(attendance_id=rec.attendance_id, time_in=None, time_out=None, leave_type=None, remarks=note)
            attendance_id = rec.attendance_id
        else:
            attendance_id = self._attendance.create(
                user_id=int(user_id), work_date=work_date, time_in=None, time_out=None, remarks=note
            )
        logger.info("User %s marked absent on %s", user_id, work_date)
        return attendance_id
