from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import TicketCategory, TicketStatus
from .model import Ticket


class TicketRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        category: TicketCategory,
        subject: str,
        description: str,
        work_date: Optional[date] = None,
        time_in: Optional[str] = None,
        time_out: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def get(self, *, ticket_id: int) -> Optional[Ticket]:
        raise NotImplementedError

    def list_tickets(
        self,
        *,
        user_id: Optional[int] = None,
        category: Optional[TicketCategory] = None,
    ) -> Sequence[Ticket]:
        raise NotImplementedError

    def set_status(
        self,
        *,
        ticket_id: int,
        status: TicketStatus,
        expected: TicketStatus,
        comments: Optional[str] = None,
    ) -> bool:
        """Compare-and-set on status; False when the ticket is not in ``expected``."""

        raise NotImplementedError

    def approve_with_correction(
        self,
        *,
        ticket_id: int,
        user_id: int,
        work_date: date,
        time_in: Optional[str],
        time_out: Optional[str],
        remarks: Optional[str] = None,
        comments: Optional[str] = None,
    ) -> bool:
        """Apply corrected punches and approve an Open ticket in one transaction.

        An existing attendance row keeps its leave type and remarks; a missing
        one is created with ``remarks``. False when the ticket is not Open.
        """

        raise NotImplementedError
