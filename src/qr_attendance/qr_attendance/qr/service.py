from __future__ import annotations

import io
import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence
from zoneinfo import ZoneInfo

import qrcode

from ..common.datetime_utils import end_of_day, to_org_time, utc_now
from ..core.constants import DEFAULT_HISTORY_LIMIT
from .codec import derive_code
from .model import DailyQrCode, QrIssue
from .repository import QrCodeRepository

logger = logging.getLogger(__name__)


class QrLifecycleService:
    """Use case: issue, fetch and regenerate the QR code of the current day."""

    def __init__(
        self,
        qr_codes: QrCodeRepository,
        *,
        secret: Optional[str],
        tz: ZoneInfo,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._qr_codes = qr_codes
        self._secret = secret
        self._tz = tz
        self._clock = clock

    def _today(self, now: datetime) -> date:
        return to_org_time(now, self._tz).date()

    def _issue(self, *, admin_id: int, day: date, now: datetime) -> DailyQrCode:
        qr = DailyQrCode(
            date=day,
            code=derive_code(day, self._secret),
            issued_by=int(admin_id),
            issued_at=now,
            expires_at=end_of_day(day, self._tz),
        )
        self._qr_codes.save(qr)
        return qr

    def generate_for_today(self, admin_id: int, *, now: datetime | None = None) -> QrIssue:
        now = now or self._clock()
        today = self._today(now)

        existing = self._qr_codes.get(today)
        if existing:
            return QrIssue(code=existing.code, date=existing.date, is_new=False)

        qr = self._issue(admin_id=admin_id, day=today, now=now)
        logger.info("Issued QR code for %s (admin=%s)", today.isoformat(), admin_id)
        return QrIssue(code=qr.code, date=qr.date, is_new=True)

    def regenerate_for_today(self, admin_id: int, *, now: datetime | None = None) -> QrIssue:
        now = now or self._clock()
        today = self._today(now)

        previous = self._qr_codes.get(today)
        qr = self._issue(admin_id=admin_id, day=today, now=now)
        if previous and previous.code == qr.code:
            # Derivation depends only on (date, secret).
            logger.info("Regenerated QR code for %s is unchanged; rotate QR_SECRET to change it", today.isoformat())
        else:
            logger.info("Regenerated QR code for %s (admin=%s)", today.isoformat(), admin_id)
        return QrIssue(code=qr.code, date=qr.date, is_new=True)

    def get_today(self, *, now: datetime | None = None) -> Optional[DailyQrCode]:
        now = now or self._clock()
        return self._qr_codes.get(self._today(now))

    def history(self, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[DailyQrCode]:
        return self._qr_codes.list_recent(max(1, int(limit)))


def render_png(code: str, *, box_size: int = 10, border: int = 2) -> bytes:
    """Render a code as a PNG QR symbol."""

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=box_size,
        border=border,
    )
    qr.add_data(code)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
