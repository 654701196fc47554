from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class DailyQrCode:
    """Domain entity: the QR code issued for one organization-local day."""

    date: date
    code: str
    issued_by: int
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class QrIssue:
    """Result of a generate/regenerate call."""

    code: str
    date: date
    is_new: bool
