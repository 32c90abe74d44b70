from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional

from ..common.datetime_utils import parse_optional_date, today_local
from ..common.validators import (
    optional_iban,
    optional_phone,
    optional_text,
    require_email,
    require_non_empty,
    require_phone,
)
from ..core.constants import EDUCATION_YEARS_BACK, GENDERS, MAX_GPA
from ..core.enums import ProfileSection
from ..core.exceptions import NotFoundError, ValidationError
from .model import EmployeeProfile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


def _text(data: Mapping, name: str, label: str) -> str:
    return optional_text(data.get(name), label)


def _required(data: Mapping, name: str, label: str) -> str:
    return require_non_empty(_text(data, name, label), label)


class ProfileService:
    """Employees edit their own profile one section at a time."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get(self, user_id: int) -> EmployeeProfile:
        profile = self._profiles.get(int(user_id))
        if not profile:
            raise NotFoundError("Employee not found")
        return profile

    def _save(
        self,
        user_id: int,
        section: ProfileSection,
        details: dict,
        employee_fields: Optional[dict] = None,
    ) -> EmployeeProfile:
        ok = self._profiles.save_section(
            user_id=int(user_id),
            section=section,
            details=details,
            employee_fields=employee_fields,
        )
        if not ok:
            raise NotFoundError("Employee not found")
        logger.info("User %s updated %s details", user_id, section.value)
        return self.get(user_id)

    def update_personal_details(self, *, user_id: int, data: Mapping) -> EmployeeProfile:
        full_name = _required(data, "name", "Name")

        gender = _text(data, "gender", "Gender")
        if gender and gender not in GENDERS:
            raise ValidationError(f"Gender must be one of: {', '.join(GENDERS)}")

        try:
            dob = parse_optional_date(_text(data, "date_of_birth", "Date of birth"))
        except ValueError:
            raise ValidationError("Date of birth must be a date (YYYY-MM-DD)")
        if dob and dob >= today_local():
            raise ValidationError("Date of birth must be in the past")

        details = {
            "job_category": _text(data, "job_category", "Job category"),
            "job_type": _text(data, "job_type", "Job type"),
            "shift_timings": _text(data, "shift_timings", "Shift timings"),
            "job_status": _text(data, "job_status", "Job status") or "Probation",
            "gender": gender,
            "date_of_birth": dob.isoformat() if dob else "",
        }
        employee_fields = {
            "full_name": full_name,
            "department": _text(data, "department", "Department") or None,
            "job_title": _text(data, "job_title", "Job title") or None,
        }
        return self._save(user_id, ProfileSection.PERSONAL, details, employee_fields)

    def update_contact_details(self, *, user_id: int, data: Mapping) -> EmployeeProfile:
        details = {
            "phone_number1": require_phone(data.get("phone_number1"), "Phone number"),
            "phone_number2": optional_phone(data.get("phone_number2"), "Second phone number"),
            "current_city": _text(data, "current_city", "Current city"),
            "current_address": _text(data, "current_address", "Current address"),
            "permanent_city": _text(data, "permanent_city", "Permanent city"),
            "permanent_address": _text(data, "permanent_address", "Permanent address"),
        }
        email = require_email(data.get("email") or "")
        return self._save(user_id, ProfileSection.CONTACT, details, {"email": email})

    def update_bank_details(self, *, user_id: int, data: Mapping) -> EmployeeProfile:
        account_number = _required(data, "account_number", "Account number").replace(" ", "").replace("-", "")
        if not account_number.isdigit() or not 6 <= len(account_number) <= 24:
            raise ValidationError("Account number must be 6 to 24 digits")

        details = {
            "bank_name": _required(data, "bank_name", "Bank name"),
            "branch_name": _text(data, "branch_name", "Branch name"),
            "account_title": _required(data, "account_title", "Account title"),
            "account_number": account_number,
            "iban_number": optional_iban(data.get("iban_number")),
        }
        return self._save(user_id, ProfileSection.BANK, details)

    def update_emergency_contacts(self, *, user_id: int, data: Mapping) -> EmployeeProfile:
        details = {
            "name1": _required(data, "name1", "Contact name"),
            "relation1": _required(data, "relation1", "Relation"),
            "contact_number1": require_phone(data.get("contact_number1"), "Contact number"),
            "name2": _text(data, "name2", "Second contact name"),
            "relation2": _text(data, "relation2", "Second relation"),
            "contact_number2": optional_phone(data.get("contact_number2"), "Second contact number"),
        }
        second = [details["name2"], details["relation2"], details["contact_number2"]]
        if any(second) and not all(second):
            raise ValidationError("Second contact needs a name, a relation and a number")
        return self._save(user_id, ProfileSection.EMERGENCY, details)

    def update_education(self, *, user_id: int, data: Mapping) -> EmployeeProfile:
        gpa = _text(data, "gpa", "GPA")
        if gpa:
            try:
                value = Decimal(gpa)
            except InvalidOperation:
                raise ValidationError("GPA must be a number")
            if not value.is_finite() or not 0 <= value <= MAX_GPA:
                raise ValidationError(f"GPA must be between 0 and {MAX_GPA}")

        year = _text(data, "year_of_completion", "Year of completion")
        if year:
            this_year = today_local().year
            if not year.isdigit() or not this_year - EDUCATION_YEARS_BACK <= int(year) <= this_year:
                raise ValidationError(
                    f"Year of completion must be between {this_year - EDUCATION_YEARS_BACK} and {this_year}"
                )

        details = {
            "institute": _required(data, "institute", "Institute"),
            "degree": _required(data, "degree", "Degree"),
            "field_of_study": _text(data, "field_of_study", "Field of study"),
            "gpa": gpa,
            "year_of_completion": year,
        }
        return self._save(user_id, ProfileSection.EDUCATION, details)
