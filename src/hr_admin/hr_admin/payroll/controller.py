from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_amount
from ..common.web import admin_required, current_role, current_user_id, form_data, json_errors, login_required, page_args
from ..container import Container
from ..core.exceptions import ValidationError
from .model import SalaryDetails


def register(app: Flask, container: Container) -> None:
    def _int_arg(name: str):
        v = (request.args.get(name) or "").strip()
        if not v or v == "All":
            return None
        try:
            return int(v)
        except ValueError:
            raise ValidationError(f"{name} must be a number")

    @app.route("/api/payroll", methods=["GET"], endpoint="my_payrolls")
    @login_required
    @json_errors
    def my_payrolls():
        page, page_size = page_args()
        return jsonify(container.payroll_service.list_for_user(current_user_id(), page=page, page_size=page_size).to_dict())

    @app.route("/api/admin/payroll", methods=["GET"], endpoint="admin_payrolls")
    @admin_required
    @json_errors
    def admin_payrolls():
        page, page_size = page_args()
        result = container.payroll_service.list_payrolls(
            month=_int_arg("month"),
            year=_int_arg("year"),
            employee=request.args.get("employee", ""),
            status=request.args.get("status", "All"),
            page=page,
            page_size=page_size,
        )
        return jsonify(result.to_dict())

    @app.route("/api/admin/payroll/summary", methods=["GET"], endpoint="payroll_summary")
    @admin_required
    @json_errors
    def payroll_summary():
        return jsonify(container.payroll_service.summary())

    @app.route("/api/admin/payroll", methods=["POST"], endpoint="generate_payroll")
    @admin_required
    @json_errors
    def generate_payroll():
        data = form_data()
        per_day = data.get("per_day_salary")
        salary = SalaryDetails(
            basic_salary=require_amount(data.get("basic_salary"), "Basic salary"),
            medical_allowance=require_amount(data.get("medical_allowance"), "Medical allowance"),
            fuel_allowance=require_amount(data.get("fuel_allowance"), "Fuel allowance"),
            mobile_allowance=require_amount(data.get("mobile_allowance"), "Mobile allowance"),
            overtime_pay=require_amount(data.get("overtime_pay"), "Overtime pay"),
            per_day_salary=require_amount(per_day, "Per day salary") if per_day not in (None, "") else None,
        )
        try:
            user_id, month, year = int(data.get("user_id")), int(data.get("month")), int(data.get("year"))
        except (TypeError, ValueError):
            raise ValidationError("user_id, month and year are required numbers")

        payroll_id = container.payroll_service.generate(
            current_role=current_role(), user_id=user_id, month=month, year=year, salary=salary
        )
        return jsonify({"payroll_id": payroll_id}), 201

    @app.route("/api/admin/payroll/<int:payroll_id>", methods=["GET"], endpoint="payroll_detail")
    @admin_required
    @json_errors
    def payroll_detail(payroll_id: int):
        record, breakdown = container.payroll_service.breakdown(payroll_id)
        return jsonify(
            {
                "payroll_id": record.payroll_id,
                "employee_name": record.employee_name or "-",
                "month": record.month,
                "year": record.year,
                "status": record.status.value,
                "extra_payments": [{"description": p.description, "amount": str(p.amount)} for p in record.extra_payments],
                "breakdown": breakdown.to_dict(),
            }
        )

    @app.route("/api/admin/payroll/<int:payroll_id>", methods=["PATCH"], endpoint="edit_payroll")
    @admin_required
    @json_errors
    def edit_payroll(payroll_id: int):
        data = form_data()
        breakdown = container.payroll_service.update_adjustments(
            current_role=current_role(),
            payroll_id=payroll_id,
            tax=data.get("tax", 0),
            eobi=data.get("eobi", 0),
            provident_fund=data.get("provident_fund", 0),
            other_deductions=data.get("other_deductions", 0),
            extra_payments=data.get("extra_payments") or [],
        )
        return jsonify(breakdown.to_dict())

    @app.route("/api/admin/payroll/<int:payroll_id>/process", methods=["POST"], endpoint="process_payroll")
    @admin_required
    @json_errors
    def process_payroll(payroll_id: int):
        breakdown = container.payroll_service.process(current_role=current_role(), payroll_id=payroll_id)
        return jsonify(breakdown.to_dict())
