from __future__ import annotations

import pytest

from src.qr_attendance.qr_attendance.core.enums import Role
from src.qr_attendance.qr_attendance.core.exceptions import AuthorizationError, ValidationError
from src.qr_attendance.qr_attendance.geofence.model import DEFAULT_GEOFENCE
from src.qr_attendance.qr_attendance.storage.memory import InMemorySystemConfigRepository, MemoryStore
from src.qr_attendance.qr_attendance.system_config.service import SystemConfigService


def _service():
    return SystemConfigService(InMemorySystemConfigRepository(MemoryStore()), default_geofence=DEFAULT_GEOFENCE)


def test_default_geofence_until_configured():
    assert _service().get_geofence() == DEFAULT_GEOFENCE


def test_admin_updates_geofence():
    svc = _service()

    config = svc.update_geofence(current_role=Role.ADMIN, latitude="-2.17", longitude=-79.92, radius_meters=250)

    assert (config.latitude, config.longitude, config.radius_meters) == (-2.17, -79.92, 250.0)
    assert svc.get_geofence() == config


def test_user_cannot_update_geofence():
    with pytest.raises(AuthorizationError):
        _service().update_geofence(current_role=Role.USER, latitude=0, longitude=0, radius_meters=10)


@pytest.mark.parametrize(
    "lat,lng,radius",
    [
        (91, 0, 10),
        (0, -181, 10),
        (0, 0, 0),
        (0, 0, -5),
        ("x", 0, 10),
        (0, 0, None),
        (0, 0, "nan"),
        (0, 0, "inf"),
        (0, 0, float("inf")),
        (0, 0, float("nan")),
    ],
)
def test_geofence_values_are_validated(lat, lng, radius):
    svc = _service()

    with pytest.raises(ValidationError):
        svc.update_geofence(current_role=Role.ADMIN, latitude=lat, longitude=lng, radius_meters=radius)

    assert svc.get_geofence() == DEFAULT_GEOFENCE
