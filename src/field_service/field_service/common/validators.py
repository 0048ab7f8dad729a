from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    return v or None


def optional_int(value: Optional[str], field_name: str) -> Optional[int]:
    v = (value or "").strip() if isinstance(value, str) else value
    if v in (None, ""):
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")


def require_positive_int(value, field_name: str) -> int:
    n = optional_int(value, field_name)
    if n is None or n <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return n


def optional_decimal(value: Optional[str], field_name: str) -> Optional[Decimal]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        d = Decimal(v)
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if d < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return d


def require_choice(value: Optional[str], enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls((value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} is invalid")


def form_flag(value: Optional[str]) -> bool:
    """HTML checkbox/switch value to bool."""
    return (value or "").strip().lower() in {"1", "true", "on", "yes"}
