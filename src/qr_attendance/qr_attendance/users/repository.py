from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeType, Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        full_name: str,
        username: str,
        password_hash: str,
        role: Role,
        employee_type: Optional[EmployeeType] = None,
    ) -> int:
        raise NotImplementedError

    def set_employee_type(self, user_id: int, employee_type: EmployeeType) -> bool:
        raise NotImplementedError
