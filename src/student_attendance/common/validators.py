from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], message: str, min_len: int) -> str:
    if value is None or len(value.strip()) < min_len:
        raise ValidationError(message)
    return value.strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_email(value: Optional[str]) -> str:
    value = (value or "").strip()
    if not EMAIL_RE.match(value):
        raise ValidationError("Invalid email address")
    return value


def optional_phone(value: Optional[str]) -> Optional[str]:
    """Blank phone numbers are stored as NULL."""
    value = (value or "").strip()
    if not value:
        return None
    if not PHONE_RE.match(value):
        raise ValidationError("Invalid phone number")
    return value


def require_int_range(value: object, field_name: str, low: int, high: int) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number
