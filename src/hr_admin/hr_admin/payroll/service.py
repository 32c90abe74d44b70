from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..common.pagination import Page, all_of, contains_text, equals, match_all, paginate
from ..common.validators import require_amount, require_non_empty
from ..core.constants import DAYS_PER_MONTH, DEFAULT_PAGE_SIZE
from ..core.enums import AttendanceStatus, PayrollStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import ExtraPayment, PayrollBreakdown, PayrollRecord, SalaryDetails
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

_LATE = {AttendanceStatus.LATE_IN.value, AttendanceStatus.LATE_IN_EARLY_OUT.value}


@dataclass(frozen=True)
class AttendanceCounts:
    absent_days: int = 0
    late_ins: int = 0
    half_days: int = 0


def count_attendance(records: Iterable[AttendanceRecord]) -> AttendanceCounts:
    """Payroll-relevant counts for a month of attendance.

    Only days with a missing punch and no leave count as absent; a complete
    shift that the classifier labels Absent is not deducted.
    """
    absent = late = half = 0
    for r in records:
        status = r.status
        if not r.leave_type and (not r.time_in or not r.time_out):
            absent += 1
        elif status in _LATE:
            late += 1
        elif status == AttendanceStatus.HALF_DAY.value:
            half += 1
    return AttendanceCounts(absent_days=absent, late_ins=late, half_days=half)


class PayrollService:
    def __init__(
        self,
        payrolls: PayrollRepository,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payrolls = payrolls
        self._attendance = attendance
        self._calculator = calculator or StandardPayrollCalculator()

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can manage payroll")

    @staticmethod
    def _check_period(month: int, year: int) -> None:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")
        if not 2000 <= int(year) <= 2100:
            raise ValidationError("Year is out of range")

    def _get(self, payroll_id: int) -> PayrollRecord:
        record = self._payrolls.get(payroll_id=int(payroll_id))
        if not record:
            raise NotFoundError("Payroll not found")
        return record

    def attendance_counts(self, *, user_id: int, month: int, year: int) -> AttendanceCounts:
        start, end = month_bounds(int(year), int(month))
        return count_attendance(self._attendance.list_for_user(int(user_id), start_date=start, end_date=end))

    def generate(self, *, current_role: Role, user_id: int, month: int, year: int, salary: SalaryDetails) -> int:
        self._require_admin(current_role)
        self._check_period(month, year)
        if salary.basic_salary <= 0:
            raise ValidationError("Basic salary must be positive")
        if self._payrolls.exists_for(user_id=int(user_id), month=int(month), year=int(year)):
            raise ValidationError("Payroll for this month already exists")

        per_day = salary.per_day_salary or (salary.basic_salary / DAYS_PER_MONTH)
        counts = self.attendance_counts(user_id=user_id, month=month, year=year)
        draft = PayrollRecord(
            payroll_id=0,
            user_id=int(user_id),
            month=int(month),
            year=int(year),
            basic_salary=salary.basic_salary,
            medical_allowance=salary.medical_allowance,
            fuel_allowance=salary.fuel_allowance,
            mobile_allowance=salary.mobile_allowance,
            overtime_pay=salary.overtime_pay,
            per_day_salary=per_day,
            tax=Decimal("0"),
            eobi=Decimal("0"),
            provident_fund=Decimal("0"),
            other_deductions=Decimal("0"),
            absent_days=counts.absent_days,
            late_ins=counts.late_ins,
            half_days=counts.half_days,
            status=PayrollStatus.PENDING,
        )
        net = self._calculator.breakdown(draft).net

        payroll_id = self._payrolls.create(
            user_id=int(user_id),
            month=int(month),
            year=int(year),
            salary=salary,
            per_day_salary=per_day,
            absent_days=counts.absent_days,
            late_ins=counts.late_ins,
            half_days=counts.half_days,
            net_salary=net,
        )
        logger.info("Payroll %s generated for user %s (%02d/%d)", payroll_id, user_id, int(month), int(year))
        return payroll_id

    def breakdown(self, payroll_id: int) -> tuple[PayrollRecord, PayrollBreakdown]:
        record = self._get(payroll_id)
        return record, self._calculator.breakdown(record)

    def update_adjustments(
        self,
        *,
        current_role: Role,
        payroll_id: int,
        tax=0,
        eobi=0,
        provident_fund=0,
        other_deductions=0,
        extra_payments: Sequence[dict] = (),
    ) -> PayrollBreakdown:
        self._require_admin(current_role)
        record = self._get(payroll_id)
        if record.status != PayrollStatus.PENDING:
            raise ValidationError("Processed payrolls cannot be edited")

        if any(not isinstance(p, dict) for p in extra_payments):
            raise ValidationError("Extra payments must have a description and an amount")
        extras = tuple(
            ExtraPayment(
                description=require_non_empty(p.get("description", ""), "Extra payment description"),
                amount=require_amount(p.get("amount"), "Extra payment amount"),
            )
            for p in extra_payments
        )
        updated = replace(
            record,
            tax=require_amount(tax, "Tax"),
            eobi=require_amount(eobi, "EOBI"),
            provident_fund=require_amount(provident_fund, "Provident fund"),
            other_deductions=require_amount(other_deductions, "Other deductions"),
            extra_payments=extras,
        )
        result = self._calculator.breakdown(updated)

        ok = self._payrolls.update_adjustments(
            payroll_id=record.payroll_id,
            tax=updated.tax,
            eobi=updated.eobi,
            provident_fund=updated.provident_fund,
            other_deductions=updated.other_deductions,
            extra_payments=extras,
            net_salary=result.net,
        )
        if not ok:
            raise ValidationError("Updating payroll failed")
        return result

    def process(self, *, current_role: Role, payroll_id: int) -> PayrollBreakdown:
        self._require_admin(current_role)
        record = self._get(payroll_id)
        if record.status != PayrollStatus.PENDING:
            raise ValidationError("Payroll was already processed")

        result = self._calculator.breakdown(record)
        if not self._payrolls.mark_processed(payroll_id=record.payroll_id, net_salary=result.net):
            raise ValidationError("Processing payroll failed")
        logger.info("Payroll %s processed, net %s", payroll_id, result.net)
        return result

    def summary(self) -> dict:
        records = self._payrolls.list_payrolls()
        processed = [r for r in records if r.status == PayrollStatus.PROCESSED]
        total_net = sum((self._calculator.breakdown(r).net for r in processed), Decimal("0"))
        return {
            "total_payrolls": len(records),
            "total_employees": len({r.user_id for r in records}),
            "processed": len(processed),
            "pending": len(records) - len(processed),
            "total_net_paid": str(total_net),
        }

    def _row(self, r: PayrollRecord) -> dict:
        b = self._calculator.breakdown(r)
        return {
            "payroll_id": r.payroll_id,
            "user_id": r.user_id,
            "employee_name": r.employee_name or "-",
            "month": r.month,
            "year": r.year,
            "gross": str(b.gross),
            "total_deductions": str(b.total_deductions),
            "net_salary": str(b.net),
            "absent_days": r.absent_days,
            "late_ins": r.late_ins,
            "half_days": r.half_days,
            "status": PayrollStatus(r.status).value,
        }

    def list_payrolls(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        employee: str = "",
        status: str = "All",
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[dict]:
        predicate = all_of(
            equals(lambda r: r.month, month),
            equals(lambda r: r.year, year),
            contains_text(lambda r: r.employee_name, employee),
            equals(lambda r: PayrollStatus(r.status).value, status),
        )
        result = paginate(
            predicate,
            self._payrolls.list_payrolls(),
            page,
            page_size,
            sort_key=lambda r: (r.year, r.month),
            reverse=True,
        )
        return result.map(self._row)

    def list_for_user(self, user_id: int, *, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page[dict]:
        """Salary slips an employee can see: processed payrolls only."""
        records = self._payrolls.list_payrolls(user_id=int(user_id), status=PayrollStatus.PROCESSED)
        result = paginate(match_all(), records, page, page_size, sort_key=lambda r: (r.year, r.month), reverse=True)
        return result.map(self._row)
