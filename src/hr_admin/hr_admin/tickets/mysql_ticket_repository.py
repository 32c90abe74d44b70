from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import TicketCategory, TicketStatus
from ..database.connection import DatabaseConnection
from ..attendance.mysql_attendance_repository import insert_punches, update_punches
from ..database.mysql_base import build_where, clock_from_mysql, db_cursor, fetchall, fetchone
from .model import Ticket
from .repository import TicketRepository

_SELECT = """
    SELECT t.ticket_id, t.user_id, t.category, t.subject, t.description, t.status,
           t.created_at, t.work_date, t.time_in, t.time_out, t.comments, e.full_name
    FROM tickets t
    JOIN employees e ON e.user_id = t.user_id
"""


def _to_ticket(r: dict) -> Ticket:
    return Ticket(
        ticket_id=int(r["ticket_id"]),
        user_id=int(r["user_id"]),
        category=TicketCategory(r["category"]),
        subject=r["subject"],
        description=r["description"],
        status=TicketStatus(r["status"]),
        created_at=r["created_at"],
        work_date=r.get("work_date"),
        time_in=clock_from_mysql(r.get("time_in")),
        time_out=clock_from_mysql(r.get("time_out")),
        comments=r.get("comments"),
        employee_name=r.get("full_name"),
    )


class MySQLTicketRepository(TicketRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tickets(user_id, category, subject, description, status, work_date, time_in, time_out)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    category.value,
                    subject,
                    description,
                    TicketStatus.OPEN.value,
                    work_date,
                    time_in,
                    time_out,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, ticket_id: int) -> Optional[Ticket]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE t.ticket_id=%s", (int(ticket_id),))
            r = fetchone(cur)
            return _to_ticket(r) if r else None

    def list_tickets(
        self,
        *,
        user_id: Optional[int] = None,
        category: Optional[TicketCategory] = None,
    ) -> Sequence[Ticket]:
        clauses: list[str] = []
        params: list[object] = []
        if user_id is not None:
            clauses.append("t.user_id=%s")
            params.append(int(user_id))
        if category is not None:
            clauses.append("t.category=%s")
            params.append(category.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {build_where(clauses)} ORDER BY t.created_at DESC", tuple(params))
            return [_to_ticket(r) for r in fetchall(cur)]

    def set_status(
        self,
        *,
        ticket_id: int,
        status: TicketStatus,
        expected: TicketStatus,
        comments: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tickets
                SET status=%s, comments=COALESCE(%s, comments)
                WHERE ticket_id=%s AND status=%s
                """,
                (status.value, comments, int(ticket_id), expected.value),
            )
            return cur.rowcount > 0

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT status FROM tickets WHERE ticket_id=%s FOR UPDATE", (int(ticket_id),))
            current = fetchone(cur)
            if not current or current["status"] != TicketStatus.OPEN.value:
                return False

            cur.execute(
                """
                SELECT attendance_id, leave_type, remarks
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                FOR UPDATE
                """,
                (int(user_id), work_date),
            )
            existing = fetchone(cur)
            if existing:
                update_punches(
                    cur,
                    attendance_id=int(existing["attendance_id"]),
                    time_in=time_in,
                    time_out=time_out,
                    leave_type=existing.get("leave_type"),
                    remarks=existing.get("remarks"),
                )
            else:
                insert_punches(cur, user_id=user_id, work_date=work_date, time_in=time_in, time_out=time_out, remarks=remarks)

            cur.execute(
                "UPDATE tickets SET status=%s, comments=COALESCE(%s, comments) WHERE ticket_id=%s",
                (TicketStatus.APPROVED.value, comments, int(ticket_id)),
            )
            return True
