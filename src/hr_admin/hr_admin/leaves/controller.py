from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.validators import require_date
from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    date_arg,
    form_data,
    json_errors,
    login_required,
    page_args,
)
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _optional_date(data: dict, name: str):
        try:
            return parse_optional_date(data.get(name))
        except ValueError:
            raise ValidationError(f"{name} must be a date (YYYY-MM-DD)")

    @app.route("/api/leaves", methods=["GET"], endpoint="my_leaves")
    @login_required
    @json_errors
    def my_leaves():
        page, page_size = page_args()
        result = container.leave_service.list_for_user(
            current_user_id(),
            leave_type=request.args.get("leave_type", "All"),
            status=request.args.get("status", "All"),
            start=date_arg("from"),
            end=date_arg("to"),
            page=page,
            page_size=page_size,
        )
        return jsonify(result.to_dict())

    @app.route("/api/leaves", methods=["POST"], endpoint="apply_leave")
    @login_required
    @json_errors
    def apply_leave():
        data = form_data()
        application_id = container.leave_service.apply(
            current_role=current_role(),
            user_id=current_user_id(),
            leave_type=data.get("leave_type", ""),
            start_date=require_date(data.get("start_date", ""), "Start date"),
            end_date=require_date(data.get("end_date", ""), "End date"),
            reason=data.get("reason", ""),
            last_day_to_work=_optional_date(data, "last_day_to_work"),
            return_to_work=_optional_date(data, "return_to_work"),
        )
        return jsonify({"application_id": application_id}), 201

    @app.route("/api/leaves/balances", methods=["GET"], endpoint="leave_balances")
    @login_required
    @json_errors
    def leave_balances():
        balances = container.leave_service.balances(current_user_id())
        return jsonify(
            [{"type": b.type, "total": b.total, "used": b.used, "remaining": b.remaining} for b in balances]
        )

    @app.route("/api/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @admin_required
    @json_errors
    def admin_leaves():
        page, page_size = page_args()
        result = container.leave_service.list_all(
            leave_type=request.args.get("leave_type", "All"),
            status=request.args.get("status", "All"),
            start=date_arg("from"),
            end=date_arg("to"),
            employee=request.args.get("employee", ""),
            page=page,
            page_size=page_size,
        )
        return jsonify(result.to_dict())

    @app.route("/api/admin/leaves/<int:application_id>/approve", methods=["POST"], endpoint="approve_leave")
    @admin_required
    @json_errors
    def approve_leave(application_id: int):
        container.leave_service.approve(
            current_role=current_role(),
            application_id=application_id,
            comments=form_data().get("comments", ""),
        )
        return jsonify({"ok": True})

    @app.route("/api/admin/leaves/<int:application_id>/reject", methods=["POST"], endpoint="reject_leave")
    @admin_required
    @json_errors
    def reject_leave(application_id: int):
        container.leave_service.reject(
            current_role=current_role(),
            application_id=application_id,
            comments=form_data().get("comments", ""),
        )
        return jsonify({"ok": True})
