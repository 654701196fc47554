from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmployeeType, Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object (no DB access code).
    """

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    employee_type: Optional[EmployeeType] = None
    is_active: bool = True


@dataclass(frozen=True)
class EmployeeProfile:
    user_id: int
    employee_type: EmployeeType
    is_default: bool = False
