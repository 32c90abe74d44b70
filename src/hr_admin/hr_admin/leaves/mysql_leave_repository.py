from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import LeaveApplication
from .repository import LeaveRepository

_SELECT = """
    SELECT la.application_id, la.user_id, la.leave_type, la.start_date, la.end_date,
           la.last_day_to_work, la.return_to_work, la.total_days, la.reason,
           la.status, la.comments, e.full_name
    FROM leave_applications la
    JOIN employees e ON e.user_id = la.user_id
"""


def _to_application(r: dict) -> LeaveApplication:
    return LeaveApplication(
        application_id=int(r["application_id"]),
        user_id=int(r["user_id"]),
        leave_type=r["leave_type"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        total_days=int(r["total_days"]),
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        last_day_to_work=r.get("last_day_to_work"),
        return_to_work=r.get("return_to_work"),
        comments=r.get("comments"),
        employee_name=r.get("full_name"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_applications(
                    user_id, leave_type, start_date, end_date, last_day_to_work,
                    return_to_work, total_days, reason, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    leave_type,
                    start_date,
                    end_date,
                    last_day_to_work,
                    return_to_work,
                    int(total_days),
                    reason,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, application_id: int) -> Optional[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE la.application_id=%s", (int(application_id),))
            r = fetchone(cur)
            return _to_application(r) if r else None

    def list_applications(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveApplication]:
        clauses: list[str] = []
        params: list[object] = []
        if user_id is not None:
            clauses.append("la.user_id=%s")
            params.append(int(user_id))
        if status is not None:
            clauses.append("la.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {build_where(clauses)} ORDER BY la.start_date DESC",
                tuple(params),
            )
            return [_to_application(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        application_id: int,
        status: LeaveStatus,
        comments: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_applications
                SET status=%s, comments=%s
                WHERE application_id=%s AND status=%s
                """,
                (status.value, comments, int(application_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
