from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_email(value: str, field_name: str = "Email") -> str:
    value = require_non_empty(value, field_name)
    if "@" not in value:
        raise ValidationError(f"{field_name} is not a valid email address")
    return value.lower()


def as_list(value) -> list[str]:
    """Accept a list or a single value; drop blanks."""
    if value is None:
        return []
    items = value if isinstance(value, (list, tuple)) else [value]
    return [str(v).strip() for v in items if v is not None and str(v).strip()]
