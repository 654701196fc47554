from __future__ import annotations

from typing import Optional

from ...core.enums import GeolocationErrorKind
from ...geofence.model import GeofenceConfig, GeoPoint
from .base import LocationDecision, LocationStrategy


class RemoteLocationStrategy(LocationStrategy):
    """Remote employees register from anywhere."""

    def check(
        self,
        *,
        position: Optional[GeoPoint],
        position_error: Optional[GeolocationErrorKind],
        fence: Optional[GeofenceConfig],
    ) -> LocationDecision:
        return LocationDecision(is_valid=True)
