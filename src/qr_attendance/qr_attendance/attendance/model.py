from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import GeolocationErrorKind, RejectionKind, WindowReason


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one registration per (user, day)."""

    user_id: int
    date: date
    timestamp: datetime
    qr_code: str

    @property
    def record_id(self) -> str:
        return f"{self.user_id}_{self.date.isoformat()}"


@dataclass(frozen=True)
class Accepted:
    timestamp: datetime
    date: date
    qr_code: str

    accepted = True

    def to_dict(self) -> dict:
        return {
            "success": True,
            "timestamp": self.timestamp.isoformat(),
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True)
class Rejected:
    kind: RejectionKind
    message: str
    reason: Optional[WindowReason] = None
    distance: Optional[float] = None
    location_error: Optional[GeolocationErrorKind] = None

    accepted = False

    def to_dict(self) -> dict:
        out: dict = {"success": False, "kind": self.kind.value, "message": self.message}
        if self.reason is not None:
            out["reason"] = self.reason.value
        if self.distance is not None:
            out["distance"] = self.distance
        if self.location_error is not None:
            out["locationError"] = self.location_error.value
        return out


RegistrationResult = Union[Accepted, Rejected]
