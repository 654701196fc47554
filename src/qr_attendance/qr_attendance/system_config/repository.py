from __future__ import annotations

from typing import Optional, Protocol

from ..geofence.model import GeofenceConfig


class SystemConfigRepository(Protocol):
    """Singleton system settings editable by admins (stored under id 'main')."""

    def get_geofence(self) -> Optional[GeofenceConfig]:
        raise NotImplementedError

    def save_geofence(self, config: GeofenceConfig) -> None:
        raise NotImplementedError
