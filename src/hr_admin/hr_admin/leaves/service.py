from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional

from ..common.datetime_utils import inclusive_days
from ..common.pagination import Page, all_of, contains_text, equals, on_or_after, on_or_before, paginate
from ..common.validators import require_choice, require_non_empty
from ..core.constants import DEFAULT_LEAVE_ENTITLEMENTS, DEFAULT_PAGE_SIZE
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .aggregator import compute_leave_balances, empty_balances
from .model import LeaveApplication, LeaveBalance
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def _fmt(d: Optional[date]) -> str:
    return d.strftime("%Y-%m-%d") if d else "-"


def to_row(a: LeaveApplication) -> dict:
    return {
        "application_id": a.application_id,
        "user_id": a.user_id,
        "employee_name": a.employee_name or "-",
        "leave_type": a.leave_type,
        "start_date": _fmt(a.start_date),
        "end_date": _fmt(a.end_date),
        "last_day_to_work": _fmt(a.last_day_to_work),
        "return_to_work": _fmt(a.return_to_work),
        "total_days": a.total_days,
        "reason": a.reason,
        "status": LeaveStatus(a.status).value,
        "comments": a.comments or "",
    }


class LeaveService:
    def __init__(self, leaves: LeaveRepository, *, entitlements: Optional[Mapping[str, int]] = None):
        self._leaves = leaves
        self._entitlements = dict(entitlements or DEFAULT_LEAVE_ENTITLEMENTS)

    @property
    def leave_types(self) -> list[str]:
        return list(self._entitlements)

    def apply(
        self,
        *,
        current_role: Role,
        user_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: str,
        last_day_to_work: Optional[date] = None,
        return_to_work: Optional[date] = None,
    ) -> int:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can apply for leave")

        leave_type = require_choice(leave_type, "Leave type", self.leave_types)
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")
        if last_day_to_work and last_day_to_work > start_date:
            raise ValidationError("Last day to work must be on or before start date")
        if return_to_work and return_to_work <= end_date:
            raise ValidationError("Return to work must be after end date")
        reason = require_non_empty(reason, "Reason")

        application_id = self._leaves.create(
            user_id=int(user_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            total_days=inclusive_days(start_date, end_date),
            reason=reason,
            last_day_to_work=last_day_to_work,
            return_to_work=return_to_work,
        )
        logger.info("Leave application %s submitted by user %s", application_id, user_id)
        return application_id

    def _decide(self, *, current_role: Role, application_id: int, status: LeaveStatus, comments: str) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        app = self._leaves.get(application_id=int(application_id))
        if not app:
            raise NotFoundError("Leave application not found")
        if app.status != LeaveStatus.PENDING:
            raise ValidationError("Leave application was already decided")

        ok = self._leaves.decide(
            application_id=int(application_id),
            status=status,
            comments=(comments or "").strip() or None,
        )
        if not ok:
            raise ValidationError("Updating leave application failed")
        logger.info("Leave application %s %s", application_id, status.value.lower())

    def approve(self, *, current_role: Role, application_id: int, comments: str = "") -> None:
        self._decide(current_role=current_role, application_id=application_id, status=LeaveStatus.APPROVED, comments=comments)

    def reject(self, *, current_role: Role, application_id: int, comments: str = "") -> None:
        self._decide(current_role=current_role, application_id=application_id, status=LeaveStatus.REJECTED, comments=comments)

    def balances(self, user_id: int) -> list[LeaveBalance]:
        applications = self._leaves.list_applications(user_id=int(user_id))
        return compute_leave_balances(applications, empty_balances(self._entitlements))

    @staticmethod
    def _filtered(
        applications,
        *,
        leave_type: str,
        status: str,
        start: Optional[date],
        end: Optional[date],
        employee: str,
        page: int,
        page_size: int,
    ) -> Page[dict]:
        predicate = all_of(
            equals(lambda a: a.leave_type, leave_type),
            equals(lambda a: LeaveStatus(a.status).value, status),
            on_or_after(lambda a: a.start_date, start),
            on_or_before(lambda a: a.end_date, end),
            contains_text(lambda a: a.employee_name, employee),
        )
        return paginate(predicate, applications, page, page_size, sort_key=lambda a: a.start_date, reverse=True).map(to_row)

    def list_for_user(
        self,
        user_id: int,
        *,
        leave_type: str = "All",
        status: str = "All",
        start: Optional[date] = None,
        end: Optional[date] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[dict]:
        return self._filtered(
            self._leaves.list_applications(user_id=int(user_id)),
            leave_type=leave_type,
            status=status,
            start=start,
            end=end,
            employee="",
            page=page,
            page_size=page_size,
        )

    def list_all(
        self,
        *,
        leave_type: str = "All",
        status: str = "All",
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee: str = "",
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[dict]:
        return self._filtered(
            self._leaves.list_applications(),
            leave_type=leave_type,
            status=status,
            start=start,
            end=end,
            employee=employee,
            page=page,
            page_size=page_size,
        )
