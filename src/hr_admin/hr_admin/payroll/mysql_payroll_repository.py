from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import ExtraPayment, PayrollRecord, SalaryDetails
from .repository import PayrollRepository

_SELECT = """
    SELECT p.payroll_id, p.user_id, p.month, p.year, p.basic_salary,
           p.medical_allowance, p.fuel_allowance, p.mobile_allowance, p.overtime_pay,
           p.per_day_salary, p.tax, p.eobi, p.provident_fund, p.other_deductions,
           p.absent_days, p.late_ins, p.half_days, p.status, p.net_salary, e.full_name
    FROM payrolls p
    JOIN employees e ON e.user_id = p.user_id
"""


def _dec(value) -> Decimal:
    return Decimal(str(value if value is not None else 0))


def _to_record(r: dict, extras: Sequence[ExtraPayment]) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        user_id=int(r["user_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        basic_salary=_dec(r["basic_salary"]),
        medical_allowance=_dec(r.get("medical_allowance")),
        fuel_allowance=_dec(r.get("fuel_allowance")),
        mobile_allowance=_dec(r.get("mobile_allowance")),
        overtime_pay=_dec(r.get("overtime_pay")),
        per_day_salary=_dec(r.get("per_day_salary")),
        tax=_dec(r.get("tax")),
        eobi=_dec(r.get("eobi")),
        provident_fund=_dec(r.get("provident_fund")),
        other_deductions=_dec(r.get("other_deductions")),
        absent_days=int(r.get("absent_days") or 0),
        late_ins=int(r.get("late_ins") or 0),
        half_days=int(r.get("half_days") or 0),
        status=PayrollStatus(r["status"]),
        extra_payments=tuple(extras),
        net_salary=_dec(r["net_salary"]) if r.get("net_salary") is not None else None,
        employee_name=r.get("full_name"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _extras(cur, payroll_ids: Sequence[int]) -> dict[int, list[ExtraPayment]]:
        out: dict[int, list[ExtraPayment]] = {pid: [] for pid in payroll_ids}
        if not payroll_ids:
            return out
        placeholders = ",".join(["%s"] * len(payroll_ids))
        cur.execute(
            f"""
            SELECT payroll_id, description, amount
            FROM payroll_extra_payments
            WHERE payroll_id IN ({placeholders})
            ORDER BY extra_id ASC
            """,
            tuple(payroll_ids),
        )
        for r in fetchall(cur):
            out[int(r["payroll_id"])].append(ExtraPayment(description=r["description"], amount=_dec(r["amount"])))
        return out

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payrolls(
                    user_id, month, year, basic_salary, medical_allowance, fuel_allowance,
                    mobile_allowance, overtime_pay, per_day_salary, absent_days, late_ins,
                    half_days, net_salary, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    int(month),
                    int(year),
                    salary.basic_salary,
                    salary.medical_allowance,
                    salary.fuel_allowance,
                    salary.mobile_allowance,
                    salary.overtime_pay,
                    per_day_salary,
                    int(absent_days),
                    int(late_ins),
                    int(half_days),
                    net_salary,
                    PayrollStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE p.payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            if not r:
                return None
            extras = self._extras(cur, [int(r["payroll_id"])])
            return _to_record(r, extras[int(r["payroll_id"])])

    def exists_for(self, *, user_id: int, month: int, year: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM payrolls WHERE user_id=%s AND month=%s AND year=%s",
                (int(user_id), int(month), int(year)),
            )
            return fetchone(cur) is not None

    def list_payrolls(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[PayrollStatus] = None,
    ) -> Sequence[PayrollRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if user_id is not None:
            clauses.append("p.user_id=%s")
            params.append(int(user_id))
        if status is not None:
            clauses.append("p.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {build_where(clauses)} ORDER BY p.year DESC, p.month DESC, p.user_id ASC",
                tuple(params),
            )
            rows = fetchall(cur)
            extras = self._extras(cur, [int(r["payroll_id"]) for r in rows])
            return [_to_record(r, extras[int(r["payroll_id"])]) for r in rows]

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
        with db_cursor(self._conn_factory) as (_, cur):
            # rowcount is 0 for an unchanged row, so lock and check the status first
            cur.execute("SELECT status FROM payrolls WHERE payroll_id=%s FOR UPDATE", (int(payroll_id),))
            current = fetchone(cur)
            if not current or current["status"] != PayrollStatus.PENDING.value:
                return False
            cur.execute(
                """
                UPDATE payrolls
                SET tax=%s, eobi=%s, provident_fund=%s, other_deductions=%s, net_salary=%s
                WHERE payroll_id=%s
                """,
                (tax, eobi, provident_fund, other_deductions, net_salary, int(payroll_id)),
            )
            cur.execute("DELETE FROM payroll_extra_payments WHERE payroll_id=%s", (int(payroll_id),))
            for p in extra_payments:
                cur.execute(
                    "INSERT INTO payroll_extra_payments(payroll_id, description, amount) VALUES(%s,%s,%s)",
                    (int(payroll_id), p.description, p.amount),
                )
            return True

    def mark_processed(self, *, payroll_id: int, net_salary: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payrolls
                SET status=%s, net_salary=%s
                WHERE payroll_id=%s AND status=%s
                """,
                (PayrollStatus.PROCESSED.value, net_salary, int(payroll_id), PayrollStatus.PENDING.value),
            )
            return cur.rowcount > 0
