"""Eligibility engine: the single authority on whether a scan becomes a record.

Checks run in a fixed order and stop at the first rejection:

1. already registered today      -> DUPLICATE
2. registration window closed    -> TIME_WINDOW (reason BEFORE/AFTER)
3. no code for today / expired   -> NO_QR / EXPIRED
4. code does not match           -> INVALID_QR
5. location rule of the employee -> OUT_OF_RANGE
6. create-if-absent commit       -> DUPLICATE when the race is lost

Expected rejections are returned as values. Anything unexpected (store
down, malformed data) is logged and returned as GENERIC.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import to_org_time, utc_now
from ..core.enums import EmployeeType, GeolocationErrorKind, RejectionKind
from ..core.exceptions import DuplicateRecordError
from ..core.messages import location_message, rejection_message, window_message
from ..geofence.gate import format_distance
from ..geofence.model import GeofenceConfig, GeoPoint
from ..qr.codec import codes_match, verify_code
from ..qr.repository import QrCodeRepository
from .factory import LocationStrategyFactory
from .model import Accepted, AttendanceRecord, Rejected, RegistrationResult
from .repository import AttendanceRepository
from .time_window import AttendanceWindow, evaluate_window

logger = logging.getLogger(__name__)


class EligibilityEngine:
    def __init__(
        self,
        attendance: AttendanceRepository,
        qr_codes: QrCodeRepository,
        geofence: Callable[[], GeofenceConfig],
        *,
        secret: Optional[str],
        tz: ZoneInfo,
        window: AttendanceWindow,
        strategy_factory: LocationStrategyFactory | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._attendance = attendance
        self._qr_codes = qr_codes
        self._geofence = geofence
        self._secret = secret
        self._tz = tz
        self._window = window
        self._factory = strategy_factory or LocationStrategyFactory()
        self._clock = clock

    def attempt_registration(
        self,
        user_id: int,
        scanned_code: str,
        employee_type: EmployeeType,
        position: Optional[GeoPoint] = None,
        *,
        position_error: Optional[GeolocationErrorKind] = None,
        now: datetime | None = None,
    ) -> RegistrationResult:
        now = now or self._clock()
        try:
            result = self._evaluate(
                user_id=user_id,
                candidate=(scanned_code or "").strip(),
                employee_type=employee_type,
                position=position,
                position_error=position_error,
                now=now,
            )
        except Exception:
            logger.exception("Unexpected failure while registering attendance for user %s", user_id)
            return self._reject(RejectionKind.GENERIC)

        if isinstance(result, Rejected):
            logger.info("Attendance rejected for user %s: %s", user_id, result.kind.value)
        return result

    def _reject(self, kind: RejectionKind, message: str | None = None, **extra) -> Rejected:
        return Rejected(kind=kind, message=message or rejection_message(kind), **extra)

    def _evaluate(
        self,
        *,
        user_id: int,
        candidate: str,
        employee_type: EmployeeType,
        position: Optional[GeoPoint],
        position_error: Optional[GeolocationErrorKind],
        now: datetime,
    ) -> RegistrationResult:
        org_now = to_org_time(now, self._tz)
        today = org_now.date()

        if self._attendance.get_for_user_and_date(user_id, today):
            return self._reject(RejectionKind.DUPLICATE)

        status = evaluate_window(org_now, self._window)
        if not status.is_open:
            return self._reject(
                RejectionKind.TIME_WINDOW,
                window_message(status.reason, self._window.display()),
                reason=status.reason,
            )

        qr = self._qr_codes.get(today)
        if not qr:
            return self._reject(RejectionKind.NO_QR)
        if qr.is_expired(now):
            return self._reject(RejectionKind.EXPIRED)

        # stored code wins over derivation so a regenerated code invalidates the old one
        if not (codes_match(candidate, qr.code) and verify_code(candidate, today, self._secret)):
            return self._reject(RejectionKind.INVALID_QR)

        strategy = self._factory.for_employee_type(employee_type)
        fence = self._geofence() if strategy.requires_location else None
        location = strategy.check(position=position, position_error=position_error, fence=fence)
        if not location.is_valid:
            if location.location_error is not None:
                return self._reject(
                    RejectionKind.OUT_OF_RANGE,
                    location_message(location.location_error),
                    location_error=location.location_error,
                )
            message = rejection_message(RejectionKind.OUT_OF_RANGE)
            if location.distance is not None:
                message = f"{message} (distance: {format_distance(location.distance)})"
            return self._reject(RejectionKind.OUT_OF_RANGE, message, distance=location.distance)

        record = AttendanceRecord(user_id=user_id, date=today, timestamp=now, qr_code=candidate)
        try:
            self._attendance.create_if_absent(record)
        except DuplicateRecordError:
            logger.warning("Lost create-if-absent race for %s", record.record_id)
            return self._reject(RejectionKind.DUPLICATE)

        logger.info("Attendance registered for user %s on %s", user_id, today.isoformat())
        return Accepted(timestamp=now, date=today, qr_code=candidate)
