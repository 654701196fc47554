"""User-facing messages.

Every rejection kind maps to its own actionable text; raw store errors never
reach the end user.
"""

from __future__ import annotations

from .enums import GeolocationErrorKind, RejectionKind, WindowReason

ATTENDANCE_REGISTERED = "Attendance registered successfully"
QR_GENERATED = "QR code generated successfully"
QR_REGENERATED = "QR code regenerated successfully"
LOGIN_FAILED = "Invalid username or password"
LOGIN_REQUIRED = "Please log in to continue"
FORBIDDEN = "You do not have permission to perform this action"
SYSTEM_ERROR = "Something went wrong. Please try again"

REJECTION_MESSAGES: dict[RejectionKind, str] = {
    RejectionKind.DUPLICATE: "You have already registered your attendance today",
    RejectionKind.NO_QR: "No QR code has been generated for today yet",
    RejectionKind.EXPIRED: "This QR code has expired",
    RejectionKind.INVALID_QR: "Invalid QR code. Please scan again",
    RejectionKind.OUT_OF_RANGE: "You are outside the allowed area. Move closer and scan again",
    RejectionKind.TIME_WINDOW: "Attendance registration is closed right now",
    RejectionKind.GENERIC: SYSTEM_ERROR,
}

LOCATION_MESSAGES: dict[GeolocationErrorKind, str] = {
    GeolocationErrorKind.PERMISSION_DENIED: (
        "Location permission denied. Onsite employees must allow location access in settings."
    ),
    GeolocationErrorKind.POSITION_UNAVAILABLE: "Could not get your location. Check your GPS and try again.",
    GeolocationErrorKind.TIMEOUT: "Timed out while getting your location. Try again.",
}


def rejection_message(kind: RejectionKind) -> str:
    return REJECTION_MESSAGES.get(kind, SYSTEM_ERROR)


def window_message(reason: WindowReason, window_display: str) -> str:
    if reason == WindowReason.BEFORE:
        return f"The attendance window has not opened yet. Available {window_display}."
    if reason == WindowReason.AFTER:
        return f"The attendance window has closed. Available {window_display}."
    return "Attendance window is open"


def location_message(kind: GeolocationErrorKind) -> str:
    return LOCATION_MESSAGES[kind]
