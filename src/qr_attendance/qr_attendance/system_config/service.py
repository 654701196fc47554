from __future__ import annotations

import logging

from ..common.validators import require_float_in_range, require_positive_finite
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..geofence.model import GeofenceConfig
from .repository import SystemConfigRepository

logger = logging.getLogger(__name__)


class SystemConfigService:
    """Use case: read (everyone) and update (admin) the geofence."""

    def __init__(self, config: SystemConfigRepository, *, default_geofence: GeofenceConfig):
        self._config = config
        self._default_geofence = default_geofence

    def get_geofence(self) -> GeofenceConfig:
        return self._config.get_geofence() or self._default_geofence

    def update_geofence(self, *, current_role: Role, latitude, longitude, radius_meters) -> GeofenceConfig:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can change the geofence")

        lat = require_float_in_range(latitude, "Latitude", -90.0, 90.0)
        lng = require_float_in_range(longitude, "Longitude", -180.0, 180.0)
        radius = require_positive_finite(radius_meters, "Radius")

        config = GeofenceConfig(latitude=lat, longitude=lng, radius_meters=radius)
        self._config.save_geofence(config)
        logger.info("Geofence updated: lat=%s lng=%s radius=%sm", lat, lng, radius)
        return config
