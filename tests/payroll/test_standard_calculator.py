from decimal import Decimal

from src.hr_admin.hr_admin.core.enums import PayrollStatus
from src.hr_admin.hr_admin.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.hr_admin.hr_admin.payroll.model import ExtraPayment, PayrollRecord


def _record(**overrides):
    values = dict(
        payroll_id=1,
        user_id=2,
        month=5,
        year=2024,
        basic_salary=Decimal("60000"),
        medical_allowance=Decimal("3000"),
        fuel_allowance=Decimal("2000"),
        mobile_allowance=Decimal("1000"),
        overtime_pay=Decimal("0"),
        per_day_salary=Decimal("2000"),
        tax=Decimal("1500"),
        eobi=Decimal("370"),
        provident_fund=Decimal("3000"),
        other_deductions=Decimal("0"),
        absent_days=0,
        late_ins=0,
        half_days=0,
        status=PayrollStatus.PENDING,
    )
    values.update(overrides)
    return PayrollRecord(**values)


def test_net_without_attendance_deductions():
    b = StandardPayrollCalculator().breakdown(_record())
    assert b.gross == Decimal("66000.00")
    assert b.total_deductions == Decimal("4870.00")
    assert b.net == Decimal("61130.00")


def test_attendance_deductions():
    b = StandardPayrollCalculator().breakdown(_record(absent_days=2, late_ins=9, half_days=1))
    assert b.absent_deduction == Decimal("4000.00")
    # 9 late check-ins -> two complete groups of four -> one full day
    assert b.late_deduction == Decimal("2000.00")
    assert b.half_day_deduction == Decimal("1000.00")
    assert b.net == Decimal("66000") - Decimal("4870") - Decimal("7000")


def test_three_late_ins_cost_nothing():
    assert StandardPayrollCalculator().breakdown(_record(late_ins=3)).late_deduction == Decimal("0.00")


def test_extra_payments_are_added():
    extras = (ExtraPayment("Bonus", Decimal("5000")), ExtraPayment("Arrears", Decimal("250.50")))
    b = StandardPayrollCalculator().breakdown(_record(extra_payments=extras))
    assert b.extras_total == Decimal("5250.50")
    assert b.net == Decimal("66380.50")


def test_amounts_round_to_cents():
    b = StandardPayrollCalculator().breakdown(_record(per_day_salary=Decimal("2000") / 3, half_days=1))
    assert b.half_day_deduction == Decimal("333.33")
    assert b.to_dict()["half_day_deduction"] == "333.33"
