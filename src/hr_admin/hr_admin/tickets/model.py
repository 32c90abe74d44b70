from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TicketCategory, TicketStatus


@dataclass(frozen=True)
class Ticket:
    """Support ticket raised by an employee.

    Attendance tickets also carry the day and the punch times to apply.
    """

    ticket_id: int
    user_id: int
    category: TicketCategory
    subject: str
    description: str
    status: TicketStatus
    created_at: datetime
    work_date: Optional[date] = None
    time_in: Optional[str] = None
    time_out: Optional[str] = None
    comments: Optional[str] = None
    employee_name: Optional[str] = None
