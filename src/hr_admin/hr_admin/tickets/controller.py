from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.web import admin_required, current_role, current_user_id, form_data, json_errors, login_required, page_args
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _list_args() -> dict:
        page, page_size = page_args()
        return {
            "category": request.args.get("category", "All"),
            "status": request.args.get("status", "All"),
            "search": request.args.get("search", ""),
            "page": page,
            "page_size": page_size,
        }

    @app.route("/api/tickets", methods=["GET"], endpoint="my_tickets")
    @login_required
    @json_errors
    def my_tickets():
        return jsonify(container.ticket_service.list_for_user(current_user_id(), **_list_args()).to_dict())

    @app.route("/api/tickets", methods=["POST"], endpoint="create_ticket")
    @login_required
    @json_errors
    def create_ticket():
        data = form_data()
        try:
            work_date = parse_optional_date(data.get("date"))
        except ValueError:
            raise ValidationError("date must be a date (YYYY-MM-DD)")
        ticket_id = container.ticket_service.create(
            user_id=current_user_id(),
            category=data.get("category", ""),
            subject=data.get("subject", ""),
            description=data.get("description", ""),
            work_date=work_date,
            time_in=data.get("time_in", ""),
            time_out=data.get("time_out", ""),
        )
        return jsonify({"ticket_id": ticket_id}), 201

    @app.route("/api/tickets/<int:ticket_id>/close", methods=["POST"], endpoint="close_ticket")
    @login_required
    @json_errors
    def close_ticket(ticket_id: int):
        container.ticket_service.close(current_role=current_role(), user_id=current_user_id(), ticket_id=ticket_id)
        return jsonify({"ok": True})

    @app.route("/api/admin/tickets", methods=["GET"], endpoint="admin_tickets")
    @admin_required
    @json_errors
    def admin_tickets():
        return jsonify(container.ticket_service.list_all(**_list_args()).to_dict())

    @app.route("/api/admin/tickets/<int:ticket_id>/approve", methods=["POST"], endpoint="approve_ticket")
    @admin_required
    @json_errors
    def approve_ticket(ticket_id: int):
        container.ticket_service.approve(
            current_role=current_role(), ticket_id=ticket_id, comments=form_data().get("comments", "")
        )
        return jsonify({"ok": True})

    @app.route("/api/admin/tickets/<int:ticket_id>/reject", methods=["POST"], endpoint="reject_ticket")
    @admin_required
    @json_errors
    def reject_ticket(ticket_id: int):
        container.ticket_service.reject(
            current_role=current_role(), ticket_id=ticket_id, comments=form_data().get("comments", "")
        )
        return jsonify({"ok": True})
