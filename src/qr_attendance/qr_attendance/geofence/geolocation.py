"""Device position acquisition.

The browser/device owns the GPS; the server only sees what the client
reports with the scan. Acquisition failures keep their own kind so callers
can tell "denied" (fix in settings) from "unavailable"/"timeout" (retry).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol

from ..common.datetime_utils import utc_now
from ..core.constants import GPS_CLOCK_SKEW_SECONDS, GPS_MAXIMUM_AGE_SECONDS, GPS_TIMEOUT_SECONDS
from ..core.enums import GeolocationErrorKind
from ..core.exceptions import GeolocationError
from .model import GeoPoint

# W3C GeolocationPositionError codes
_W3C_ERROR_CODES = {
    1: GeolocationErrorKind.PERMISSION_DENIED,
    2: GeolocationErrorKind.POSITION_UNAVAILABLE,
    3: GeolocationErrorKind.TIMEOUT,
}


@dataclass(frozen=True)
class GpsOptions:
    timeout_seconds: float = GPS_TIMEOUT_SECONDS
    maximum_age_seconds: float = GPS_MAXIMUM_AGE_SECONDS
    high_accuracy: bool = True

    def to_client(self) -> dict:
        return {
            "enableHighAccuracy": self.high_accuracy,
            "timeout": int(self.timeout_seconds * 1000),
            "maximumAge": int(self.maximum_age_seconds * 1000),
        }


@dataclass(frozen=True)
class PositionFix:
    latitude: float
    longitude: float
    accuracy: Optional[float]
    timestamp: datetime

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)


class GeolocationProvider(Protocol):
    def get_current_position(
        self,
        *,
        timeout: float,
        maximum_age: float,
        high_accuracy: bool,
    ) -> PositionFix:
        """Return a fix or raise GeolocationError."""

        raise NotImplementedError


def _parse_error_kind(raw) -> GeolocationErrorKind:
    if isinstance(raw, str) and raw.strip().isdigit():
        raw = int(raw.strip())
    if isinstance(raw, int):
        return _W3C_ERROR_CODES.get(raw, GeolocationErrorKind.POSITION_UNAVAILABLE)
    try:
        return GeolocationErrorKind(str(raw).strip().upper())
    except ValueError:
        return GeolocationErrorKind.POSITION_UNAVAILABLE


def _parse_timestamp(raw, fallback: datetime) -> datetime:
    if raw is None:
        return fallback
    if isinstance(raw, (int, float)):
        # epoch milliseconds, as reported by navigator.geolocation
        return datetime.fromtimestamp(float(raw) / 1000.0, tz=timezone.utc)
    value = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _coordinate(payload: dict, *names: str) -> float:
    for name in names:
        if name in payload and payload[name] is not None:
            value = float(payload[name])
            if math.isfinite(value):
                return value
            break
    raise ValueError(f"missing coordinate {names[0]}")


class ClientReportedGeolocation(GeolocationProvider):
    """Position (or acquisition error) sent by the device with the scan request.

    `timeout` and `high_accuracy` are applied on the device, which receives
    them through the client config endpoint; here only staleness is checked.
    """

    def __init__(self, payload: Optional[dict], *, clock: Callable[[], datetime] = utc_now):
        self._payload = payload
        self._clock = clock

    def get_current_position(
        self,
        *,
        timeout: float = GPS_TIMEOUT_SECONDS,
        maximum_age: float = GPS_MAXIMUM_AGE_SECONDS,
        high_accuracy: bool = True,
    ) -> PositionFix:
        payload = self._payload
        if not isinstance(payload, dict) or not payload:
            raise GeolocationError(GeolocationErrorKind.POSITION_UNAVAILABLE, "No position reported")

        if payload.get("error") is not None:
            kind = _parse_error_kind(payload["error"])
            raise GeolocationError(kind, str(payload.get("message") or kind.value))

        now = self._clock()
        try:
            lat = _coordinate(payload, "lat", "latitude")
            lng = _coordinate(payload, "lng", "longitude")
            timestamp = _parse_timestamp(payload.get("timestamp"), now)
            accuracy = float(payload["accuracy"]) if payload.get("accuracy") is not None else None
        except (TypeError, ValueError, OverflowError) as exc:
            raise GeolocationError(GeolocationErrorKind.POSITION_UNAVAILABLE, f"Malformed position: {exc}") from exc

        if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
            raise GeolocationError(GeolocationErrorKind.POSITION_UNAVAILABLE, "Coordinates out of range")

        if timestamp - now > timedelta(seconds=GPS_CLOCK_SKEW_SECONDS):
            raise GeolocationError(GeolocationErrorKind.POSITION_UNAVAILABLE, "Reported position is in the future")
        if now - timestamp > timedelta(seconds=maximum_age):
            raise GeolocationError(GeolocationErrorKind.POSITION_UNAVAILABLE, "Reported position is stale")

        return PositionFix(latitude=lat, longitude=lng, accuracy=accuracy, timestamp=timestamp)
