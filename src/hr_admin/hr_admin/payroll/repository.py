from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import ExtraPayment, PayrollRecord, SalaryDetails


class PayrollRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        month: int,
        year: int,
        salary: SalaryDetails,
        per_day_salary: Decimal,
        absent_days: int,
        late_ins: int,
        half_days: int,
        net_salary: Decimal,
    ) -> int:
        raise NotImplementedError

    def get(self, *, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def exists_for(self, *, user_id: int, month: int, year: int) -> bool:
        raise NotImplementedError

    def list_payrolls(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[PayrollStatus] = None,
    ) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def update_adjustments(
        self,
        *,
        payroll_id: int,
        tax: Decimal,
        eobi: Decimal,
        provident_fund: Decimal,
        other_deductions: Decimal,
        extra_payments: Sequence[ExtraPayment],
        net_salary: Decimal,
    ) -> bool:
        raise NotImplementedError

    def mark_processed(self, *, payroll_id: int, net_salary: Decimal) -> bool:
        """Pending -> Processed; False when the payroll is not Pending."""

        raise NotImplementedError
