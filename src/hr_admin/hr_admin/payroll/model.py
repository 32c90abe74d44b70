from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class ExtraPayment:
    description: str
    amount: Decimal


@dataclass(frozen=True)
class SalaryDetails:
    """Monthly salary inputs entered when a payroll is generated."""

    basic_salary: Decimal
    medical_allowance: Decimal = Decimal("0")
    fuel_allowance: Decimal = Decimal("0")
    mobile_allowance: Decimal = Decimal("0")
    overtime_pay: Decimal = Decimal("0")
    per_day_salary: Optional[Decimal] = None


@dataclass(frozen=True)
class PayrollRecord:
    payroll_id: int
    user_id: int
    month: int
    year: int
    basic_salary: Decimal
    medical_allowance: Decimal
    fuel_allowance: Decimal
    mobile_allowance: Decimal
    overtime_pay: Decimal
    per_day_salary: Decimal
    tax: Decimal
    eobi: Decimal
    provident_fund: Decimal
    other_deductions: Decimal
    absent_days: int
    late_ins: int
    half_days: int
    status: PayrollStatus
    extra_payments: tuple[ExtraPayment, ...] = ()
    net_salary: Optional[Decimal] = None
    employee_name: Optional[str] = None


@dataclass(frozen=True)
class PayrollBreakdown:
    gross: Decimal
    absent_deduction: Decimal
    late_deduction: Decimal
    half_day_deduction: Decimal
    total_deductions: Decimal
    extras_total: Decimal
    net: Decimal

    def to_dict(self) -> dict:
        return {k: str(v) for k, v in asdict(self).items()}
