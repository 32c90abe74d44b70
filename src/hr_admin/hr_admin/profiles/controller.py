from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, form_data, json_errors, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users/profile", methods=["GET"], endpoint="my_profile")
    @login_required
    @json_errors
    def my_profile():
        return jsonify(container.profile_service.get(current_user_id()).to_dict())

    sections = {
        "personal-details": container.profile_service.update_personal_details,
        "contact-details": container.profile_service.update_contact_details,
        "bank-details": container.profile_service.update_bank_details,
        "emergency-contacts": container.profile_service.update_emergency_contacts,
        "education": container.profile_service.update_education,
    }

    @app.route("/api/users/<section>", methods=["PUT"], endpoint="update_profile_section")
    @login_required
    @json_errors
    def update_profile_section(section: str):
        handler = sections.get(section)
        if handler is None:
            return jsonify({"error": "Unknown profile section"}), 404
        profile = handler(user_id=current_user_id(), data=form_data())
        return jsonify(profile.to_dict())
