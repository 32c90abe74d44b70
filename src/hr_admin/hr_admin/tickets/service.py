from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.clock import parse_clock_minutes
from ..common.pagination import Page, all_of, contains_text, equals, paginate
from ..common.validators import optional_clock, require_choice, require_non_empty
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import Role, TicketCategory, TicketStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Ticket
from .repository import TicketRepository

logger = logging.getLogger(__name__)


def to_row(t: Ticket) -> dict:
    return {
        "ticket_id": t.ticket_id,
        "user_id": t.user_id,
        "employee_name": t.employee_name or "-",
        "category": TicketCategory(t.category).value,
        "subject": t.subject,
        "description": t.description,
        "status": TicketStatus(t.status).value,
        "created_at": t.created_at.strftime("%Y-%m-%d %H:%M"),
        "date": t.work_date.strftime("%Y-%m-%d") if t.work_date else "-",
        "time_in": t.time_in or "-",
        "time_out": t.time_out or "-",
        "comments": t.comments or "",
    }


class TicketService:
    def __init__(self, tickets: TicketRepository, attendance: AttendanceRepository):
        self._tickets = tickets
        self._attendance = attendance

    def create(
        self,
        *,
        user_id: int,
        category: str,
        subject: str,
        description: str,
        work_date: Optional[date] = None,
        time_in: str = "",
        time_out: str = "",
    ) -> int:
        cat = TicketCategory(require_choice(category, "Category", [c.value for c in TicketCategory]))
        subject = require_non_empty(subject, "Subject")
        description = require_non_empty(description, "Description")

        t_in = t_out = None
        if cat == TicketCategory.ATTENDANCE:
            if work_date is None:
                raise ValidationError("Attendance tickets need a date")
            t_in = optional_clock(time_in, "Time in")
            t_out = optional_clock(time_out, "Time out")
            if not t_in and not t_out:
                raise ValidationError("Enter at least one corrected time")
            if t_in and t_out and parse_clock_minutes(t_out) < parse_clock_minutes(t_in):
                raise ValidationError("Time out cannot be earlier than time in")
        else:
            work_date = None

        ticket_id = self._tickets.create(
            user_id=int(user_id),
            category=cat,
            subject=subject,
            description=description,
            work_date=work_date,
            time_in=t_in,
            time_out=t_out,
        )
        logger.info("Ticket %s (%s) opened by user %s", ticket_id, cat.value, user_id)
        return ticket_id

    def _get(self, ticket_id: int) -> Ticket:
        ticket = self._tickets.get(ticket_id=int(ticket_id))
        if not ticket:
            raise NotFoundError("Ticket not found")
        return ticket

    def _corrected_punches(self, ticket: Ticket) -> tuple[Optional[str], Optional[str]]:
        rec = self._attendance.get_for_user_and_date(ticket.user_id, ticket.work_date)
        new_in = ticket.time_in or (rec.time_in if rec else None)
        new_out = ticket.time_out or (rec.time_out if rec else None)
        if new_in and new_out and parse_clock_minutes(new_out) < parse_clock_minutes(new_in):
            raise ValidationError("Time out cannot be earlier than time in")
        return new_in, new_out

    def _decide(self, *, current_role: Role, ticket_id: int, status: TicketStatus, comments: str) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        ticket = self._get(ticket_id)
        if ticket.status != TicketStatus.OPEN:
            raise ValidationError("Ticket was already handled")

        note = (comments or "").strip() or None
        if status == TicketStatus.APPROVED and ticket.category == TicketCategory.ATTENDANCE:
            new_in, new_out = self._corrected_punches(ticket)
            ok = self._tickets.approve_with_correction(
                ticket_id=ticket.ticket_id,
                user_id=ticket.user_id,
                work_date=ticket.work_date,
                time_in=new_in,
                time_out=new_out,
                remarks=f"Corrected by ticket #{ticket.ticket_id}",
                comments=note,
            )
        else:
            ok = self._tickets.set_status(
                ticket_id=ticket.ticket_id, status=status, expected=TicketStatus.OPEN, comments=note
            )
        if not ok:
            raise ValidationError("Updating ticket failed")
        logger.info("Ticket %s %s", ticket_id, status.value.lower())

    def approve(self, *, current_role: Role, ticket_id: int, comments: str = "") -> None:
        self._decide(current_role=current_role, ticket_id=ticket_id, status=TicketStatus.APPROVED, comments=comments)

    def reject(self, *, current_role: Role, ticket_id: int, comments: str = "") -> None:
        self._decide(current_role=current_role, ticket_id=ticket_id, status=TicketStatus.REJECTED, comments=comments)

    def close(self, *, current_role: Role, user_id: int, ticket_id: int) -> None:
        ticket = self._get(ticket_id)
        if current_role != Role.ADMIN and ticket.user_id != int(user_id):
            raise AuthorizationError("You can only close your own tickets")
        if ticket.status == TicketStatus.CLOSED:
            raise ValidationError("Ticket is already closed")

        if not self._tickets.set_status(ticket_id=ticket.ticket_id, status=TicketStatus.CLOSED, expected=ticket.status):
            raise ValidationError("Closing ticket failed")

    @staticmethod
    def _page(tickets, *, category: str, status: str, search: str, page: int, page_size: int) -> Page[dict]:
        predicate = all_of(
            equals(lambda t: TicketCategory(t.category).value, category),
            equals(lambda t: TicketStatus(t.status).value, status),
            contains_text(lambda t: f"{t.subject} {t.description} {t.employee_name or ''}", search),
        )
        return paginate(predicate, tickets, page, page_size, sort_key=lambda t: t.created_at, reverse=True).map(to_row)

    def list_for_user(
        self,
        user_id: int,
        *,
        category: str = "All",
        status: str = "All",
        search: str = "",
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[dict]:
        tickets = self._tickets.list_tickets(user_id=int(user_id))
        return self._page(tickets, category=category, status=status, search=search, page=page, page_size=page_size)

    def list_all(
        self,
        *,
        category: str = "All",
        status: str = "All",
        search: str = "",
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[dict]:
        tickets = self._tickets.list_tickets()
        return self._page(tickets, category=category, status=status, search=search, page=page, page_size=page_size)
