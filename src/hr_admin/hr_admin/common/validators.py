from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.exceptions import ValidationError
from .clock import is_clock
from .datetime_utils import parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date(value: str, field_name: str) -> date:
    v = require_non_empty(value, field_name)
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def optional_clock(value: Optional[str], field_name: str) -> Optional[str]:
    """Normalize an optional HH:MM field; empty means the punch is missing."""
    v = (value or "").strip()
    if not v:
        return None
    if not is_clock(v):
        raise ValidationError(f"{field_name} must be a time (HH:MM)")
    hours, minutes = v.split(":")[:2]
    return f"{int(hours):02d}:{int(minutes):02d}"


def require_amount(value, field_name: str) -> Decimal:
    try:
        amount = Decimal(str(value if value not in (None, "") else 0))
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return amount


def require_choice(value: str, field_name: str, choices) -> str:
    v = require_non_empty(value, field_name)
    if v not in choices:
        raise ValidationError(f"{field_name} must be one of: {', '.join(choices)}")
    return v


def require_int(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_RE = re.compile(r"^\+?[0-9][0-9 \-]{6,18}$")
_IBAN_RE = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{11,30}$")


def optional_text(value, field_name: str, *, max_length: int = 255) -> str:
    v = ("" if value is None else str(value)).strip()
    if len(v) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")
    return v


def require_email(value: str, field_name: str = "Email") -> str:
    v = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(v):
        raise ValidationError(f"{field_name} is not a valid email address")
    return v.lower()


def optional_phone(value, field_name: str) -> str:
    v = optional_text(value, field_name, max_length=20)
    if v and not _PHONE_RE.match(v):
        raise ValidationError(f"{field_name} is not a valid phone number")
    return v


def require_phone(value, field_name: str) -> str:
    require_non_empty("" if value is None else str(value), field_name)
    return optional_phone(value, field_name)


def optional_iban(value, field_name: str = "IBAN") -> str:
    v = optional_text(value, field_name, max_length=40).replace(" ", "").upper()
    if v and not _IBAN_RE.match(v):
        raise ValidationError(f"{field_name} is not a valid IBAN")
    return v
