from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.web import admin_required, current_role, form_data, json_errors, login_required, page_args
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notices", methods=["GET"], endpoint="notices")
    @login_required
    @json_errors
    def notices():
        page, page_size = page_args()
        result = container.notice_service.list_notices(
            status=request.args.get("status", "All"), page=page, page_size=page_size
        )
        body = result.to_dict()
        body["unread"] = container.notice_service.unread_count()
        return jsonify(body)

    @app.route("/api/notices/<int:notice_id>/read", methods=["POST"], endpoint="read_notice")
    @login_required
    @json_errors
    def read_notice(notice_id: int):
        container.notice_service.mark_read(notice_id=notice_id)
        return jsonify({"ok": True})

    @app.route("/api/admin/notices", methods=["POST"], endpoint="create_notice")
    @admin_required
    @json_errors
    def create_notice():
        data = form_data()
        try:
            notice_date = parse_optional_date(data.get("date"))
        except ValueError:
            raise ValidationError("date must be a date (YYYY-MM-DD)")
        notice_id = container.notice_service.create(
            current_role=current_role(),
            subject=data.get("subject", ""),
            paragraph=data.get("paragraph", ""),
            notice_date=notice_date,
        )
        return jsonify({"notice_id": notice_id}), 201
