from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import GeolocationErrorKind
from ...geofence.model import GeofenceConfig, GeoPoint


@dataclass(frozen=True)
class LocationDecision:
    is_valid: bool
    distance: Optional[float] = None
    location_error: Optional[GeolocationErrorKind] = None


class LocationStrategy(ABC):
    """Strategy Pattern: encapsulate whether and how a position is required."""

    requires_location: bool = False

    @abstractmethod
    def check(
        self,
        *,
        position: Optional[GeoPoint],
        position_error: Optional[GeolocationErrorKind],
        fence: Optional[GeofenceConfig],
    ) -> LocationDecision:
        raise NotImplementedError
