"""Daily QR code derivation and verification.

The code for a day is the first 12 hex characters of
SHA-256("{date}|{secret}|attendance_qr_v1"). 48 bits keeps the QR symbol
small enough to scan quickly; codes are scoped to one day and one
organization, so the truncated space is acceptable.
"""

from __future__ import annotations

import hashlib
import hmac
from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_QR_SECRET, QR_CODE_LENGTH, QR_SALT


def effective_secret(secret: Optional[str]) -> str:
    return secret or DEFAULT_QR_SECRET


def build_payload(day: date, secret: Optional[str]) -> str:
    return f"{day.isoformat()}|{effective_secret(secret)}|{QR_SALT}"


def derive_code(day: date, secret: Optional[str]) -> str:
    digest = hashlib.sha256(build_payload(day, secret).encode("utf-8")).hexdigest()
    return digest[:QR_CODE_LENGTH]


def codes_match(candidate, expected: str) -> bool:
    """Constant-time comparison that never raises on odd input."""
    if not isinstance(candidate, str) or len(candidate) != len(expected):
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def verify_code(candidate, day: date, secret: Optional[str]) -> bool:
    return codes_match(candidate, derive_code(day, secret))
