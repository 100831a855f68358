from __future__ import annotations

import re
from typing import Any, Optional

from ..core.constants import MAX_TEXT_LENGTH, MYSQL_INT_MAX
from ..core.exceptions import InvalidCapacityError, ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str, *, max_length: int = MAX_TEXT_LENGTH) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    text = str(value).strip()
    if len(text) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")
    return text


def optional_text(value: Optional[str], field_name: str, *, max_length: int = MAX_TEXT_LENGTH) -> Optional[str]:
    text = str(value or "").strip()
    if not text:
        return None
    if len(text) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")
    return text


def require_password(value: str) -> str:
    # Passwords are hashed as given; only emptiness is rejected.
    if not isinstance(value, str) or not value:
        raise ValidationError("Password is required")
    return value


def require_email(value: str) -> str:
    email = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email is not valid")
    return email


def _strict_int(value: Any) -> Optional[int]:
    # bool is an int subclass and int(2.9) truncates; neither is a valid integer input.
    if isinstance(value, (bool, float)):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def require_positive_id(value: Any, field_name: str) -> int:
    parsed = _strict_int(value)
    if parsed is None:
        raise ValidationError(f"{field_name} must be an integer")
    if parsed <= 0 or parsed > MYSQL_INT_MAX:
        raise ValidationError(f"{field_name} must be between 1 and {MYSQL_INT_MAX}")
    return parsed


def require_capacity(value: Any) -> int:
    capacity = _strict_int(value)
    if capacity is None or capacity <= 0:
        raise InvalidCapacityError("Capacity must be a positive integer")
    if capacity > MYSQL_INT_MAX:
        raise InvalidCapacityError(f"Capacity must be at most {MYSQL_INT_MAX}")
    return capacity
