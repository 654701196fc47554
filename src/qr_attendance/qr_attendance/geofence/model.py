from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_GEOFENCE_LAT, DEFAULT_GEOFENCE_LNG, DEFAULT_GEOFENCE_RADIUS_METERS


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeofenceConfig:
    """Circular region an onsite employee must be inside."""

    latitude: float
    longitude: float
    radius_meters: float

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)

    def to_dict(self) -> dict:
        return {"lat": self.latitude, "lng": self.longitude, "radiusMeters": self.radius_meters}


DEFAULT_GEOFENCE = GeofenceConfig(
    latitude=DEFAULT_GEOFENCE_LAT,
    longitude=DEFAULT_GEOFENCE_LNG,
    radius_meters=DEFAULT_GEOFENCE_RADIUS_METERS,
)
