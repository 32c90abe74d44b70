from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from src.hr_admin.hr_admin.attendance.model import AttendanceRecord
from src.hr_admin.hr_admin.core.enums import PayrollStatus, Role
from src.hr_admin.hr_admin.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hr_admin.hr_admin.payroll.model import PayrollRecord, SalaryDetails
from src.hr_admin.hr_admin.payroll.service import PayrollService, count_attendance


class FakeAttendance:
    def __init__(self, records):
        self._records = list(records)

    def list_for_user(self, user_id, *, start_date=None, end_date=None):
        return [
            r
            for r in self._records
            if r.user_id == user_id
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
        ]


class FakePayrolls:
    def __init__(self):
        self._next_id = 1
        self._rows: dict[int, PayrollRecord] = {}

    def create(self, *, user_id, month, year, salary, per_day_salary, absent_days, late_ins, half_days, net_salary):
        pid = self._next_id
        self._next_id += 1
        self._rows[pid] = PayrollRecord(
            payroll_id=pid,
            user_id=user_id,
            month=month,
            year=year,
            basic_salary=salary.basic_salary,
            medical_allowance=salary.medical_allowance,
            fuel_allowance=salary.fuel_allowance,
            mobile_allowance=salary.mobile_allowance,
            overtime_pay=salary.overtime_pay,
            per_day_salary=per_day_salary,
            tax=Decimal("0"),
            eobi=Decimal("0"),
            provident_fund=Decimal("0"),
            other_deductions=Decimal("0"),
            absent_days=absent_days,
            late_ins=late_ins,
            half_days=half_days,
            status=PayrollStatus.PENDING,
            net_salary=net_salary,
            employee_name=f"Employee {user_id}",
        )
        return pid

    def get(self, *, payroll_id):
        return self._rows.get(int(payroll_id))

    def exists_for(self, *, user_id, month, year):
        return any(r.user_id == user_id and r.month == month and r.year == year for r in self._rows.values())

    def list_payrolls(self, *, user_id=None, status=None):
        return [
            r
            for r in self._rows.values()
            if (user_id is None or r.user_id == user_id) and (status is None or r.status == status)
        ]

    def update_adjustments(self, *, payroll_id, tax, eobi, provident_fund, other_deductions, extra_payments, net_salary):
        r = self._rows[payroll_id]
        self._rows[payroll_id] = replace(
            r,
            tax=tax,
            eobi=eobi,
            provident_fund=provident_fund,
            other_deductions=other_deductions,
            extra_payments=tuple(extra_payments),
            net_salary=net_salary,
        )
        return True

    def mark_processed(self, *, payroll_id, net_salary):
        r = self._rows.get(payroll_id)
        if not r or r.status != PayrollStatus.PENDING:
            return False
        self._rows[payroll_id] = replace(r, status=PayrollStatus.PROCESSED, net_salary=net_salary)
        return True


def _may_attendance():
    return [
        AttendanceRecord(1, 2, date(2024, 5, 2), "09:00", "17:00"),  # full day, labelled Absent
        AttendanceRecord(2, 2, date(2024, 5, 3), None, None),  # missing punch
        AttendanceRecord(3, 2, date(2024, 5, 6), "19:00", "23:00"),
        AttendanceRecord(4, 2, date(2024, 5, 7), "09:00", "15:30"),
        AttendanceRecord(5, 2, date(2024, 5, 8), None, None, leave_type="Sick Leave"),
        AttendanceRecord(6, 2, date(2024, 6, 3), None, None),  # next month
    ]


SALARY = SalaryDetails(basic_salary=Decimal("60000"), medical_allowance=Decimal("3000"))


def test_count_attendance_only_deducts_missing_punches():
    counts = count_attendance([r for r in _may_attendance() if r.work_date.month == 5])
    assert counts.absent_days == 1
    assert counts.late_ins == 1
    assert counts.half_days == 1


def test_generate_uses_month_attendance_and_default_per_day():
    payrolls = FakePayrolls()
    svc = PayrollService(payrolls, FakeAttendance(_may_attendance()))

    pid = svc.generate(current_role=Role.ADMIN, user_id=2, month=5, year=2024, salary=SALARY)
    record = payrolls.get(payroll_id=pid)

    assert record.per_day_salary == Decimal("2000")
    assert (record.absent_days, record.late_ins, record.half_days) == (1, 1, 1)
    # 63000 gross - 2000 absent - 1000 half day
    assert record.net_salary == Decimal("60000.00")


def test_generate_rejects_duplicate_month():
    svc = PayrollService(FakePayrolls(), FakeAttendance([]))
    svc.generate(current_role=Role.ADMIN, user_id=2, month=5, year=2024, salary=SALARY)
    with pytest.raises(ValidationError):
        svc.generate(current_role=Role.ADMIN, user_id=2, month=5, year=2024, salary=SALARY)


@pytest.mark.parametrize("month, year", [(0, 2024), (13, 2024), (5, 1999)])
def test_generate_rejects_bad_period(month, year):
    svc = PayrollService(FakePayrolls(), FakeAttendance([]))
    with pytest.raises(ValidationError):
        svc.generate(current_role=Role.ADMIN, user_id=2, month=month, year=year, salary=SALARY)


def test_generate_requires_admin():
    svc = PayrollService(FakePayrolls(), FakeAttendance([]))
    with pytest.raises(AuthorizationError):
        svc.generate(current_role=Role.EMPLOYEE, user_id=2, month=5, year=2024, salary=SALARY)


def test_adjustments_then_process():
    payrolls = FakePayrolls()
    svc = PayrollService(payrolls, FakeAttendance([]))
    pid = svc.generate(current_role=Role.ADMIN, user_id=2, month=5, year=2024, salary=SALARY)

    result = svc.update_adjustments(
        current_role=Role.ADMIN,
        payroll_id=pid,
        tax="1500",
        eobi="370",
        provident_fund="3000",
        extra_payments=[{"description": "Bonus", "amount": "5000"}],
    )
    assert result.net == Decimal("63130.00")

    processed = svc.process(current_role=Role.ADMIN, payroll_id=pid)
    assert processed.net == Decimal("63130.00")
    assert payrolls.get(payroll_id=pid).status == PayrollStatus.PROCESSED

    with pytest.raises(ValidationError):
        svc.process(current_role=Role.ADMIN, payroll_id=pid)
    with pytest.raises(ValidationError):
        svc.update_adjustments(current_role=Role.ADMIN, payroll_id=pid, tax="0")


def test_negative_adjustment_is_rejected():
    svc = PayrollService(FakePayrolls(), FakeAttendance([]))
    pid = svc.generate(current_role=Role.ADMIN, user_id=2, month=5, year=2024, salary=SALARY)
    with pytest.raises(ValidationError):
        svc.update_adjustments(current_role=Role.ADMIN, payroll_id=pid, tax="-1")


def test_breakdown_missing_payroll():
    with pytest.raises(NotFoundError):
        PayrollService(FakePayrolls(), FakeAttendance([])).breakdown(9)


def test_summary_and_listing():
    svc = PayrollService(FakePayrolls(), FakeAttendance([]))
    first = svc.generate(current_role=Role.ADMIN, user_id=2, month=4, year=2024, salary=SALARY)
    svc.generate(current_role=Role.ADMIN, user_id=2, month=5, year=2024, salary=SALARY)
    svc.generate(current_role=Role.ADMIN, user_id=3, month=5, year=2024, salary=SALARY)
    svc.process(current_role=Role.ADMIN, payroll_id=first)

    summary = svc.summary()
    assert summary["total_payrolls"] == 3
    assert summary["total_employees"] == 2
    assert summary["processed"] == 1
    assert summary["pending"] == 2
    assert summary["total_net_paid"] == "63000.00"

    assert svc.list_payrolls(month=5).total_items == 2
    assert svc.list_payrolls(employee="employee 3").items[0]["user_id"] == 3
    assert svc.list_payrolls(status="Processed").items[0]["month"] == 4

    slips = svc.list_for_user(2)
    assert slips.total_items == 1
    assert slips.items[0]["net_salary"] == "63000.00"
