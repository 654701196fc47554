from __future__ import annotations

from typing import Optional

from ...core.enums import GeolocationErrorKind
from ...geofence.gate import is_within_geofence
from ...geofence.model import GeofenceConfig, GeoPoint
from .base import LocationDecision, LocationStrategy


class OnsiteLocationStrategy(LocationStrategy):
    """Onsite employees must report a position inside the geofence."""

    requires_location = True

    def check(
        self,
        *,
        position: Optional[GeoPoint],
        position_error: Optional[GeolocationErrorKind],
        fence: Optional[GeofenceConfig],
    ) -> LocationDecision:
        if position is None or fence is None:
            return LocationDecision(
                is_valid=False,
                location_error=position_error or GeolocationErrorKind.POSITION_UNAVAILABLE,
            )

        result = is_within_geofence(position, fence)
        return LocationDecision(is_valid=result.is_valid, distance=result.distance)
