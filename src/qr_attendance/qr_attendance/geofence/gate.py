from __future__ import annotations

from dataclasses import dataclass

from geopy.distance import geodesic

from .model import GeofenceConfig, GeoPoint


@dataclass(frozen=True)
class GeofenceResult:
    is_valid: bool
    distance: float


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """WGS-84 geodesic distance in meters."""
    return geodesic((a.latitude, a.longitude), (b.latitude, b.longitude)).meters


def is_within_geofence(position: GeoPoint, fence: GeofenceConfig) -> GeofenceResult:
    # millimetre rounding keeps the boundary inclusive despite float noise
    distance = round(distance_meters(position, fence.center), 3)
    return GeofenceResult(is_valid=distance <= fence.radius_meters, distance=distance)


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{round(meters)} m"
    return f"{meters / 1000:.2f} km"
