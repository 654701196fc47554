from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence
from zoneinfo import ZoneInfo

from ..common.datetime_utils import month_bounds, to_org_time, utc_now
from ..core.enums import EmployeeType, GeolocationErrorKind, RejectionKind
from ..core.exceptions import DomainError, GeolocationError
from ..core.messages import SYSTEM_ERROR, rejection_message
from ..geofence.geolocation import ClientReportedGeolocation, GpsOptions
from ..geofence.model import GeoPoint
from ..users.service import EmployeeProfileService
from .eligibility import EligibilityEngine
from .model import AttendanceRecord, Rejected, RegistrationResult
from .repository import AttendanceRepository
from .time_window import AttendanceWindow, evaluate_window, time_until_boundary

logger = logging.getLogger(__name__)

CAN_REGISTER = "You can register your attendance today"


class AttendanceService:
    """Use cases around a user's attendance: scan, status checks and history."""

    def __init__(
        self,
        engine: EligibilityEngine,
        attendance: AttendanceRepository,
        profiles: EmployeeProfileService,
        *,
        tz: ZoneInfo,
        window: AttendanceWindow,
        gps_options: GpsOptions | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._engine = engine
        self._attendance = attendance
        self._profiles = profiles
        self._tz = tz
        self._window = window
        self._gps = gps_options or GpsOptions()
        self._clock = clock

    @property
    def gps_options(self) -> GpsOptions:
        return self._gps

    def _today(self, now: datetime) -> date:
        return to_org_time(now, self._tz).date()

    def today(self) -> date:
        """Current date in the organization timezone."""
        return self._today(self._clock())

    def _resolve_position(
        self, payload: Optional[dict], now: datetime
    ) -> tuple[Optional[GeoPoint], Optional[GeolocationErrorKind]]:
        provider = ClientReportedGeolocation(payload, clock=lambda: now)
        try:
            fix = provider.get_current_position(
                timeout=self._gps.timeout_seconds,
                maximum_age=self._gps.maximum_age_seconds,
                high_accuracy=self._gps.high_accuracy,
            )
        except GeolocationError as e:
            logger.info("Position unavailable (%s): %s", e.kind.value, e)
            return None, e.kind
        return fix.point, None

    def register_scan(
        self,
        user_id: int,
        code: str,
        position_payload: Optional[dict] = None,
        *,
        now: datetime | None = None,
    ) -> RegistrationResult:
        now = now or self._clock()

        try:
            employee_type = self._profiles.get_profile(user_id).employee_type
        except DomainError:
            raise
        except Exception:
            logger.exception("Could not load employee profile of user %s", user_id)
            return Rejected(kind=RejectionKind.GENERIC, message=rejection_message(RejectionKind.GENERIC))

        position: Optional[GeoPoint] = None
        position_error: Optional[GeolocationErrorKind] = None
        # remote users never need a fix
        if employee_type == EmployeeType.ONSITE:
            position, position_error = self._resolve_position(position_payload, now)

        return self._engine.attempt_registration(
            user_id,
            code,
            employee_type,
            position,
            position_error=position_error,
            now=now,
        )

    def can_register_today(self, user_id: int, *, now: datetime | None = None) -> dict:
        now = now or self._clock()
        try:
            existing = self._attendance.get_for_user_and_date(user_id, self._today(now))
        except Exception:
            logger.exception("Could not check today's attendance for user %s", user_id)
            return {"can_register": False, "message": SYSTEM_ERROR}

        if existing:
            return {"can_register": False, "message": rejection_message(RejectionKind.DUPLICATE)}
        return {"can_register": True, "message": CAN_REGISTER}

    def monthly_dates(self, user_id: int, year: int, month: int) -> list[str]:
        start, end = month_bounds(int(year), int(month))
        records = self._attendance.list_for_user(user_id, start, end)
        return sorted(r.date.isoformat() for r in records)

    def history(self, user_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user(user_id, start, end)

    def window_status(self, *, now: datetime | None = None) -> dict:
        org_now = to_org_time(now or self._clock(), self._tz)
        status = evaluate_window(org_now, self._window)
        boundary = time_until_boundary(org_now, self._window)
        return {
            "is_open": status.is_open,
            "reason": status.reason.value,
            "minutes_to_boundary": boundary.minutes,
            "is_before_window": boundary.is_before_window,
            "is_after_window": boundary.is_after_window,
            "window": {
                "start": self._window.start.strftime("%H:%M"),
                "end": self._window.end.strftime("%H:%M"),
                "display": self._window.display(),
            },
            "timezone": str(self._tz),
            "now": org_now.isoformat(),
        }
