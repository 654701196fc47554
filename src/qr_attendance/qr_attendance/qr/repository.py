from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailyQrCode


class QrCodeRepository(Protocol):
    """Storage for daily QR codes, keyed by date."""

    def get(self, qr_date: date) -> Optional[DailyQrCode]:
        raise NotImplementedError

    def save(self, qr: DailyQrCode) -> None:
        """Insert or overwrite the record for `qr.date`."""

        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[DailyQrCode]:
        raise NotImplementedError
