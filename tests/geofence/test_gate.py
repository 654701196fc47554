from __future__ import annotations

import pytest
from geopy.distance import geodesic

from src.qr_attendance.qr_attendance.geofence.gate import distance_meters, format_distance, is_within_geofence
from src.qr_attendance.qr_attendance.geofence.model import DEFAULT_GEOFENCE, GeofenceConfig, GeoPoint

FENCE = GeofenceConfig(latitude=-0.1807, longitude=-78.4678, radius_meters=100)


def _offset(meters: float, bearing: float = 90) -> GeoPoint:
    p = geodesic(meters=meters).destination((FENCE.latitude, FENCE.longitude), bearing=bearing)
    return GeoPoint(p.latitude, p.longitude)


def test_center_is_inside():
    result = is_within_geofence(FENCE.center, FENCE)

    assert result.is_valid is True
    assert result.distance == 0


def test_point_exactly_on_radius_is_inside():
    result = is_within_geofence(_offset(100), FENCE)

    assert result.distance == pytest.approx(100, abs=0.001)
    assert result.is_valid is True


def test_point_one_meter_beyond_radius_is_outside():
    result = is_within_geofence(_offset(101), FENCE)

    assert result.distance == pytest.approx(101, abs=0.001)
    assert result.is_valid is False


@pytest.mark.parametrize("bearing", [0, 90, 180, 270])
def test_point_beyond_radius_is_outside(bearing):
    result = is_within_geofence(_offset(150, bearing), FENCE)

    assert result.is_valid is False
    assert result.distance == pytest.approx(150, abs=0.01)


def test_distance_is_symmetric():
    a = GeoPoint(-0.1807, -78.4678)
    b = GeoPoint(-0.2, -78.5)

    assert distance_meters(a, b) == pytest.approx(distance_meters(b, a))


def test_format_distance():
    assert format_distance(42.4) == "42 m"
    assert format_distance(1530) == "1.53 km"


def test_default_geofence_is_quito():
    assert DEFAULT_GEOFENCE.to_dict() == {"lat": -0.1807, "lng": -78.4678, "radiusMeters": 100.0}
