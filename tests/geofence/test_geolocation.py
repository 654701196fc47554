from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.qr_attendance.qr_attendance.core.enums import GeolocationErrorKind
from src.qr_attendance.qr_attendance.core.exceptions import GeolocationError
from src.qr_attendance.qr_attendance.geofence.geolocation import ClientReportedGeolocation, GpsOptions

NOW = datetime(2024, 3, 1, 13, 0, tzinfo=timezone.utc)


def _provider(payload):
    return ClientReportedGeolocation(payload, clock=lambda: NOW)


def test_reported_fix_is_returned():
    fix = _provider({"lat": -0.1807, "lng": -78.4678, "accuracy": 12}).get_current_position()

    assert (fix.latitude, fix.longitude, fix.accuracy) == (-0.1807, -78.4678, 12.0)
    assert fix.timestamp == NOW
    assert fix.point.latitude == -0.1807


def test_long_coordinate_names_and_epoch_ms_timestamp():
    ts_ms = (NOW - timedelta(seconds=5)).timestamp() * 1000

    fix = _provider({"latitude": 1.5, "longitude": 2.5, "timestamp": ts_ms}).get_current_position()

    assert (fix.latitude, fix.longitude) == (1.5, 2.5)
    assert fix.timestamp == NOW - timedelta(seconds=5)


@pytest.mark.parametrize(
    "error,kind",
    [
        (1, GeolocationErrorKind.PERMISSION_DENIED),
        ("2", GeolocationErrorKind.POSITION_UNAVAILABLE),
        (3, GeolocationErrorKind.TIMEOUT),
        ("timeout", GeolocationErrorKind.TIMEOUT),
        ("PERMISSION_DENIED", GeolocationErrorKind.PERMISSION_DENIED),
        ("weird", GeolocationErrorKind.POSITION_UNAVAILABLE),
    ],
)
def test_reported_errors_keep_their_kind(error, kind):
    with pytest.raises(GeolocationError) as exc:
        _provider({"error": error}).get_current_position()

    assert exc.value.kind == kind


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {},
        {"lat": "abc", "lng": 1},
        {"lat": 1},
        {"lat": 91, "lng": 0},
        {"lat": 0, "lng": 181},
        {"lat": float("nan"), "lng": 0},
    ],
)
def test_missing_or_malformed_position_is_unavailable(payload):
    with pytest.raises(GeolocationError) as exc:
        _provider(payload).get_current_position()

    assert exc.value.kind == GeolocationErrorKind.POSITION_UNAVAILABLE


def test_stale_fix_is_rejected():
    stale = (NOW - timedelta(seconds=31)).isoformat()

    with pytest.raises(GeolocationError) as exc:
        _provider({"lat": 0, "lng": 0, "timestamp": stale}).get_current_position(maximum_age=30)

    assert exc.value.kind == GeolocationErrorKind.POSITION_UNAVAILABLE


@pytest.mark.parametrize("timestamp", ["2030-01-01T00:00:00Z", (NOW + timedelta(seconds=6)).isoformat()])
def test_fix_from_the_future_is_rejected(timestamp):
    with pytest.raises(GeolocationError) as exc:
        _provider({"lat": 0, "lng": 0, "timestamp": timestamp}).get_current_position()

    assert exc.value.kind == GeolocationErrorKind.POSITION_UNAVAILABLE


def test_small_clock_skew_is_tolerated():
    ahead = (NOW + timedelta(seconds=3)).isoformat()

    fix = _provider({"lat": 0, "lng": 0, "timestamp": ahead}).get_current_position()

    assert fix.timestamp == NOW + timedelta(seconds=3)


def test_gps_options_for_client():
    assert GpsOptions().to_client() == {"enableHighAccuracy": True, "timeout": 10000, "maximumAge": 30000}
