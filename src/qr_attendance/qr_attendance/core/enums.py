from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    USER = "user"


class EmployeeType(str, Enum):
    """Whether registering attendance requires being on site."""

    ONSITE = "onsite"
    REMOTE = "remote"


class WindowReason(str, Enum):
    BEFORE = "BEFORE"
    ACTIVE = "ACTIVE"
    AFTER = "AFTER"


class RejectionKind(str, Enum):
    """Why a scan attempt did not become an attendance record."""

    DUPLICATE = "DUPLICATE"
    NO_QR = "NO_QR"
    EXPIRED = "EXPIRED"
    INVALID_QR = "INVALID_QR"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    TIME_WINDOW = "TIME_WINDOW"
    GENERIC = "GENERIC"


class GeolocationErrorKind(str, Enum):
    PERMISSION_DENIED = "PERMISSION_DENIED"
    POSITION_UNAVAILABLE = "POSITION_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
