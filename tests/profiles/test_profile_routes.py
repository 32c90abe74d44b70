from __future__ import annotations

from dataclasses import replace
from types import SimpleNamespace

import pytest

from src.hr_admin.hr_admin.core.enums import Role
from src.hr_admin.hr_admin.profiles.controller import register
from src.hr_admin.hr_admin.profiles.model import EmployeeProfile
from src.hr_admin.hr_admin.profiles.service import ProfileService


class MemoryProfiles:
    def __init__(self):
        self.rows = {2: EmployeeProfile(2, "Sara Khan", "sara.khan@example.com", Role.EMPLOYEE)}

    def get(self, user_id):
        return self.rows.get(user_id)

    def save_section(self, *, user_id, section, details, employee_fields=None):
        if user_id not in self.rows:
            return False
        p = self.rows[user_id]
        self.rows[user_id] = replace(p, sections={**p.sections, section.value: dict(details)}, **(employee_fields or {}))
        return True


@pytest.fixture
def client(make_client):
    return make_client(SimpleNamespace(profile_service=ProfileService(MemoryProfiles())), register)


def test_profile_requires_login(client):
    assert client.get("/api/users/profile").status_code == 401
    assert client.put("/api/users/education", json={}).status_code == 401


def test_edit_sections_and_read_back(client, login_as):
    login_as(client, 2, "employee")
    resp = client.put(
        "/api/users/emergency-contacts",
        json={"name1": "Omar Khan", "relation1": "Brother", "contact_number1": "+92 301 7654321"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["emergency"]["relation1"] == "Brother"

    resp = client.put("/api/users/contact-details", data={"phone_number1": "03001234567", "email": "sara@example.com"})
    assert resp.status_code == 200

    profile = client.get("/api/users/profile").get_json()
    assert profile["contact"]["phone_number1"] == "03001234567"
    assert profile["emergency"]["name1"] == "Omar Khan"


def test_invalid_section_input_is_400(client, login_as):
    login_as(client, 2, "employee")
    resp = client.put("/api/users/bank-details", json={"bank_name": "Meezan", "account_number": "12345678"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Account title is required"


def test_unknown_section_or_employee_is_404(client, login_as):
    login_as(client, 2, "employee")
    assert client.put("/api/users/hobbies", json={}).status_code == 404

    login_as(client, 9, "employee")
    assert client.get("/api/users/profile").status_code == 404
