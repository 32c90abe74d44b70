from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, clock_from_mysql, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT ar.attendance_id, ar.user_id, ar.work_date, ar.time_in, ar.time_out,
           ar.leave_type, ar.remarks, e.full_name
    FROM attendance_records ar
    JOIN employees e ON e.user_id = ar.user_id
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        time_in=clock_from_mysql(r.get("time_in")),
        time_out=clock_from_mysql(r.get("time_out")),
        leave_type=r.get("leave_type"),
        remarks=r.get("remarks"),
        employee_name=r.get("full_name"),
    )


def insert_punches(cur, *, user_id: int, work_date: date, time_in, time_out, leave_type=None, remarks=None) -> int:
    cur.execute(
        """
        INSERT INTO attendance_records(user_id, work_date, time_in, time_out, leave_type, remarks)
        VALUES(%s,%s,%s,%s,%s,%s)
        """,
        (int(user_id), work_date, time_in, time_out, leave_type, remarks),
    )
    return int(cur.lastrowid)


def update_punches(cur, *, attendance_id: int, time_in, time_out, leave_type=None, remarks=None) -> bool:
    # rowcount is 0 for an unchanged row, so lock and check existence first
    cur.execute("SELECT attendance_id FROM attendance_records WHERE attendance_id=%s FOR UPDATE", (int(attendance_id),))
    if not fetchone(cur):
        return False
    cur.execute(
        """
        UPDATE attendance_records
        SET time_in=%s, time_out=%s, leave_type=%s, remarks=%s
        WHERE attendance_id=%s
        """,
        (time_in, time_out, leave_type, remarks, int(attendance_id)),
    )
    return True


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _query(self, clauses: list[str], params: list[object]) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {build_where(clauses)} ORDER BY ar.work_date DESC, ar.user_id ASC",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    @staticmethod
    def _date_clauses(start_date: Optional[date], end_date: Optional[date]) -> tuple[list[str], list[object]]:
        clauses: list[str] = []
        params: list[object] = []
        if start_date is not None:
            clauses.append("ar.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ar.work_date <= %s")
            params.append(end_date)
        return clauses, params

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses, params = self._date_clauses(start_date, end_date)
        clauses.insert(0, "ar.user_id=%s")
        params.insert(0, int(user_id))
        return self._query(clauses, params)

    def list_all(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses, params = self._date_clauses(start_date, end_date)
        return self._query(clauses, params)

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE ar.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE ar.user_id=%s AND ar.work_date=%s", (int(user_id), work_date))
            r = fetchone(cur)
            return _to_record(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            return insert_punches(
                cur,
                user_id=user_id,
                work_date=work_date,
                time_in=time_in,
                time_out=time_out,
                leave_type=leave_type,
                remarks=remarks,
            )

    def update(
        self,
        *,
        attendance_id: int,
        time_in: Optional[str],
        time_out: Optional[str],
        leave_type: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            return update_punches(
                cur,
                attendance_id=attendance_id,
                time_in=time_in,
                time_out=time_out,
                leave_type=leave_type,
                remarks=remarks,
            )
