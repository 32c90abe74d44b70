from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .notices.mysql_notice_repository import MySQLNoticeRepository
from .notices.service import NoticeService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollService
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.service import ProfileService
from .tickets.mysql_ticket_repository import MySQLTicketRepository
from .tickets.service import TicketService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    leave_repo: MySQLLeaveRepository
    payroll_repo: MySQLPayrollRepository
    ticket_repo: MySQLTicketRepository
    notice_repo: MySQLNoticeRepository
    profile_repo: MySQLProfileRepository

    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService
    ticket_service: TicketService
    notice_service: NoticeService
    profile_service: ProfileService


def build_container(*, db_config: dict, leave_entitlements: Optional[Mapping[str, int]] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    leave_repo = MySQLLeaveRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)
    ticket_repo = MySQLTicketRepository(conn)
    notice_repo = MySQLNoticeRepository(conn)
    profile_repo = MySQLProfileRepository(conn)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        payroll_repo=payroll_repo,
        ticket_repo=ticket_repo,
        notice_repo=notice_repo,
        profile_repo=profile_repo,
        attendance_service=AttendanceService(attendance_repo, leave_types=list(leave_entitlements) if leave_entitlements else None),
        leave_service=LeaveService(leave_repo, entitlements=leave_entitlements),
        payroll_service=PayrollService(payroll_repo, attendance_repo),
        ticket_service=TicketService(ticket_repo, attendance_repo),
        notice_service=NoticeService(notice_repo),
        profile_service=ProfileService(profile_repo),
    )
