from __future__ import annotations

import math

from ..core.enums import EmployeeType
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_float_in_range(value, field_name: str, low: float, high: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not low <= number <= high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def require_positive_finite(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"{field_name} must be a finite number greater than 0")
    return number


def parse_employee_type(value) -> EmployeeType:
    try:
        return EmployeeType(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(t.value for t in EmployeeType)
        raise ValidationError(f"Employee type must be one of: {allowed}") from None
