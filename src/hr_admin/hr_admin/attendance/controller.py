from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_date, require_int
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


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="my_attendance")
    @login_required
    @json_errors
    def my_attendance():
        page, page_size = page_args()
        result = container.attendance_service.list_for_user(
            current_user_id(),
            start=date_arg("from"),
            end=date_arg("to"),
            search=request.args.get("search", ""),
            only_this_week=request.args.get("range") == "This Week",
            page=page,
            page_size=page_size,
        )
        return jsonify(result.to_dict())

    @app.route("/api/attendance/overview", methods=["GET"], endpoint="attendance_overview")
    @login_required
    @json_errors
    def attendance_overview():
        counts = container.attendance_service.overview(current_user_id(), start=date_arg("from"), end=date_arg("to"))
        return jsonify(counts)

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    @json_errors
    def admin_attendance():
        page, page_size = page_args()
        result = container.attendance_service.list_all(
            start=date_arg("from"),
            end=date_arg("to"),
            employee=request.args.get("employee", ""),
            status=request.args.get("status", "All"),
            page=page,
            page_size=page_size,
        )
        return jsonify(result.to_dict())

    @app.route("/api/admin/attendance", methods=["POST"], endpoint="admin_add_attendance")
    @admin_required
    @json_errors
    def admin_add_attendance():
        data = form_data()
        attendance_id = container.attendance_service.add_record(
            current_role=current_role(),
            user_id=require_int(data.get("user_id"), "user_id"),
            work_date=require_date(data.get("date", ""), "Date"),
            time_in=data.get("time_in", ""),
            time_out=data.get("time_out", ""),
            leave_type=data.get("leave_type", ""),
            remarks=data.get("remarks", ""),
        )
        return jsonify({"attendance_id": attendance_id}), 201

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["PUT"], endpoint="admin_edit_attendance")
    @admin_required
    @json_errors
    def admin_edit_attendance(attendance_id: int):
        data = form_data()
        container.attendance_service.edit_record(
            current_role=current_role(),
            attendance_id=attendance_id,
            time_in=data.get("time_in", ""),
            time_out=data.get("time_out", ""),
            leave_type=data.get("leave_type", ""),
            remarks=data.get("remarks", ""),
        )
        return jsonify({"ok": True})

    @app.route("/api/admin/attendance/absent", methods=["POST"], endpoint="admin_mark_absent")
    @admin_required
    @json_errors
    def admin_mark_absent():
        data = form_data()
        attendance_id = container.attendance_service.mark_absent(
            current_role=current_role(),
            user_id=require_int(data.get("user_id"), "user_id"),
            work_date=require_date(data.get("date", ""), "Date"),
            remarks=data.get("remarks", ""),
        )
        return jsonify({"attendance_id": attendance_id})
