from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str | None, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} must not be empty")
    return str(value).strip()


def same_label(a: str | None, b: str | None) -> bool:
    """Compare class/batch/subject labels ignoring case and outer whitespace."""

    return (a or "").strip().upper() == (b or "").strip().upper()


def require_max_length(value: str, limit: int, field_name: str) -> str:
    if len(value) > limit:
        raise ValidationError(f"{field_name} is longer than {limit} characters")
    return value
