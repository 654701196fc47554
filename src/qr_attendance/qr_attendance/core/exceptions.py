from __future__ import annotations

from .enums import GeolocationErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConfigurationError(DomainError):
    """Raised when settings are missing or malformed."""


class DuplicateRecordError(DomainError):
    """Raised by a create-if-absent write when the key already exists."""


class GeolocationError(DomainError):
    """Raised when a device position could not be obtained."""

    def __init__(self, kind: GeolocationErrorKind, message: str | None = None):
        super().__init__(message or kind.value)
        self.kind = kind
