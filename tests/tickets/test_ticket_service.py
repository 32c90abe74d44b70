from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest

from src.hr_admin.hr_admin.attendance.model import AttendanceRecord
from src.hr_admin.hr_admin.core.enums import Role, TicketStatus
from src.hr_admin.hr_admin.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hr_admin.hr_admin.tickets.model import Ticket
from src.hr_admin.hr_admin.tickets.service import TicketService


class FakeTickets:
    def __init__(self, attendance=None):
        self._attendance = attendance
        self._next_id = 1
        self._rows: dict[int, Ticket] = {}

    def create(self, *, user_id, category, subject, description, work_date=None, time_in=None, time_out=None):
        tid = self._next_id
        self._next_id += 1
        self._rows[tid] = Ticket(
            ticket_id=tid,
            user_id=user_id,
            category=category,
            subject=subject,
            description=description,
            status=TicketStatus.OPEN,
            created_at=datetime(2024, 5, 10, 9, tid),
            work_date=work_date,
            time_in=time_in,
            time_out=time_out,
        )
        return tid

    def get(self, *, ticket_id):
        return self._rows.get(int(ticket_id))

    def list_tickets(self, *, user_id=None, category=None):
        return [
            t
            for t in self._rows.values()
            if (user_id is None or t.user_id == user_id) and (category is None or t.category == category)
        ]

    def set_status(self, *, ticket_id, status, expected, comments=None):
        t = self._rows.get(ticket_id)
        if not t or t.status != expected:
            return False
        self._rows[ticket_id] = replace(t, status=status, comments=comments or t.comments)
        return True

    def approve_with_correction(self, *, ticket_id, user_id, work_date, time_in, time_out, remarks=None, comments=None):
        t = self._rows.get(ticket_id)
        if not t or t.status != TicketStatus.OPEN:
            return False
        rec = self._attendance.get_for_user_and_date(user_id, work_date)
        if rec:
            self._attendance.update(
                attendance_id=rec.attendance_id, time_in=time_in, time_out=time_out, leave_type=rec.leave_type, remarks=rec.remarks
            )
        else:
            self._attendance.create(user_id=user_id, work_date=work_date, time_in=time_in, time_out=time_out, remarks=remarks)
        self._rows[ticket_id] = replace(t, status=TicketStatus.APPROVED, comments=comments or t.comments)
        return True


class FakeAttendance:
    def __init__(self, records=()):
        self.by_id = {r.attendance_id: r for r in records}

    def get_for_user_and_date(self, user_id, work_date):
        return next((r for r in self.by_id.values() if r.user_id == user_id and r.work_date == work_date), None)

    def create(self, *, user_id, work_date, time_in, time_out, leave_type=None, remarks=None):
        aid = len(self.by_id) + 1
        self.by_id[aid] = AttendanceRecord(aid, user_id, work_date, time_in, time_out, leave_type, remarks)
        return aid

    def update(self, *, attendance_id, time_in, time_out, leave_type=None, remarks=None):
        self.by_id[attendance_id] = replace(
            self.by_id[attendance_id], time_in=time_in, time_out=time_out, leave_type=leave_type, remarks=remarks
        )
        return True


def _attendance_ticket(svc, **overrides):
    kwargs = dict(
        user_id=2,
        category="Attendance",
        subject="Missed punch",
        description="Forgot to punch out",
        work_date=date(2024, 5, 9),
        time_in="",
        time_out="17:00",
    )
    kwargs.update(overrides)
    return svc.create(**kwargs)


def test_approving_attendance_ticket_fills_missing_punch():
    attendance = FakeAttendance([AttendanceRecord(1, 2, date(2024, 5, 9), "09:00", None)])
    tickets = FakeTickets(attendance)
    svc = TicketService(tickets, attendance)
    tid = _attendance_ticket(svc)

    svc.approve(current_role=Role.ADMIN, ticket_id=tid, comments="Fixed")

    rec = attendance.by_id[1]
    assert (rec.time_in, rec.time_out) == ("09:00", "17:00")
    assert tickets.get(ticket_id=tid).status == TicketStatus.APPROVED
    assert tickets.get(ticket_id=tid).comments == "Fixed"


def test_approving_attendance_ticket_creates_missing_day():
    attendance = FakeAttendance()
    svc = TicketService(FakeTickets(attendance), attendance)
    tid = _attendance_ticket(svc, time_in="09:00")

    svc.approve(current_role=Role.ADMIN, ticket_id=tid)

    rec = attendance.get_for_user_and_date(2, date(2024, 5, 9))
    assert rec.remarks == f"Corrected by ticket #{tid}"


def test_rejecting_does_not_touch_attendance():
    attendance = FakeAttendance([AttendanceRecord(1, 2, date(2024, 5, 9), "09:00", None)])
    svc = TicketService(FakeTickets(), attendance)
    svc.reject(current_role=Role.ADMIN, ticket_id=_attendance_ticket(svc))
    assert attendance.by_id[1].time_out is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"work_date": None},
        {"time_in": "", "time_out": ""},
        {"time_in": "18:00", "time_out": "09:00"},
        {"time_out": "9pm"},
        {"category": "Payroll"},
        {"subject": ""},
    ],
)
def test_create_validation(overrides):
    with pytest.raises(ValidationError):
        _attendance_ticket(TicketService(FakeTickets(), FakeAttendance()), **overrides)


def test_non_attendance_ticket_drops_times():
    tickets = FakeTickets()
    tid = TicketService(tickets, FakeAttendance()).create(
        user_id=2, category="Network", subject="VPN", description="Drops", work_date=date(2024, 5, 9), time_in="09:00"
    )
    t = tickets.get(ticket_id=tid)
    assert t.work_date is None and t.time_in is None


def test_only_open_tickets_can_be_decided():
    svc = TicketService(FakeTickets(), FakeAttendance())
    tid = _attendance_ticket(svc)
    svc.reject(current_role=Role.ADMIN, ticket_id=tid)
    with pytest.raises(ValidationError):
        svc.approve(current_role=Role.ADMIN, ticket_id=tid)


def test_employee_cannot_approve():
    svc = TicketService(FakeTickets(), FakeAttendance())
    with pytest.raises(AuthorizationError):
        svc.approve(current_role=Role.EMPLOYEE, ticket_id=_attendance_ticket(svc))


def test_close_own_ticket_only():
    tickets = FakeTickets()
    svc = TicketService(tickets, FakeAttendance())
    tid = _attendance_ticket(svc)

    with pytest.raises(AuthorizationError):
        svc.close(current_role=Role.EMPLOYEE, user_id=3, ticket_id=tid)

    svc.close(current_role=Role.EMPLOYEE, user_id=2, ticket_id=tid)
    assert tickets.get(ticket_id=tid).status == TicketStatus.CLOSED
    with pytest.raises(ValidationError):
        svc.close(current_role=Role.ADMIN, user_id=1, ticket_id=tid)


def test_close_missing_ticket():
    with pytest.raises(NotFoundError):
        TicketService(FakeTickets(), FakeAttendance()).close(current_role=Role.ADMIN, user_id=1, ticket_id=5)


def test_listing_filters():
    svc = TicketService(FakeTickets(), FakeAttendance())
    _attendance_ticket(svc)
    svc.create(user_id=2, category="Network", subject="VPN drops", description="Every few minutes")
    svc.create(user_id=3, category="HR", subject="Payslip query", description="Tax line")

    mine = svc.list_for_user(2)
    assert mine.total_items == 2
    assert mine.items[0]["subject"] == "VPN drops"  # newest first
    assert svc.list_all(category="HR").items[0]["user_id"] == 3
    assert svc.list_all(search="vpn").total_items == 1
    assert svc.list_all(status="Closed").total_items == 0
