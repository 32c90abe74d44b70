from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import LATE_INS_PER_HALF_DAY
from ..model import PayrollBreakdown, PayrollRecord
from .base import PayrollCalculator

_CENT = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: gross - (statutory + attendance deductions) + extra payments.

    Absent days cost a full day, half days cost half a day, and every
    complete group of four late check-ins costs half a day.
    """

    def breakdown(self, record: PayrollRecord) -> PayrollBreakdown:
        per_day = Decimal(record.per_day_salary)
        half_day = per_day / 2

        gross = (
            record.basic_salary
            + record.medical_allowance
            + record.fuel_allowance
            + record.mobile_allowance
            + record.overtime_pay
        )
        absent_deduction = per_day * record.absent_days
        late_deduction = half_day * (record.late_ins // LATE_INS_PER_HALF_DAY)
        half_day_deduction = half_day * record.half_days
        total_deductions = (
            record.tax
            + record.eobi
            + record.provident_fund
            + record.other_deductions
            + absent_deduction
            + late_deduction
            + half_day_deduction
        )
        extras_total = sum((p.amount for p in record.extra_payments), Decimal("0"))

        return PayrollBreakdown(
            gross=_money(gross),
            absent_deduction=_money(absent_deduction),
            late_deduction=_money(late_deduction),
            half_day_deduction=_money(half_day_deduction),
            total_deductions=_money(total_deductions),
            extras_total=_money(extras_total),
            net=_money(gross - total_deductions + extras_total),
        )
