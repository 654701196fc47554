from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import parse_employee_type, require_min_length, require_non_empty
from ..core.enums import EmployeeType, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..core.messages import LOGIN_FAILED
from .model import EmployeeProfile
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError(LOGIN_FAILED)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError(LOGIN_FAILED)

        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)


class UserService:
    """Use case: manage user accounts (admin, seed scripts)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(
        self,
        *,
        full_name: str,
        username: str,
        password: str,
        role: Role = Role.USER,
        employee_type: Optional[EmployeeType] = None,
    ) -> int:
        full_name = require_non_empty(full_name, "Full name")
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", 6)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        return self._users.create_user(
            full_name=full_name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            employee_type=employee_type,
        )


class EmployeeProfileService:
    """Use case: read the employee type (engine input) and let admins change it."""

    def __init__(self, users: UserRepository, *, default_employee_type: EmployeeType = EmployeeType.REMOTE):
        self._users = users
        self._default = default_employee_type

    def get_profile(self, user_id: int) -> EmployeeProfile:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User does not exist")

        if user.employee_type is None:
            logger.warning(
                "User %s has no employee type; defaulting to %s", user_id, self._default.value
            )
            return EmployeeProfile(user_id=user.user_id, employee_type=self._default, is_default=True)
        return EmployeeProfile(user_id=user.user_id, employee_type=user.employee_type)

    def set_employee_type(self, *, current_role: Role, user_id: int, employee_type) -> EmployeeProfile:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can change employee types")

        new_type = parse_employee_type(employee_type)
        if not self._users.get_by_id(user_id):
            raise ValidationError("User does not exist")

        self._users.set_employee_type(user_id, new_type)
        logger.info("Employee type of user %s set to %s", user_id, new_type.value)
        return EmployeeProfile(user_id=int(user_id), employee_type=new_type)
