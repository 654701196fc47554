from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

import config.testing
from config import get_settings_module
from src.qr_attendance.qr_attendance.core.enums import EmployeeType
from src.qr_attendance.qr_attendance.core.exceptions import ConfigurationError
from src.qr_attendance.qr_attendance.settings import load_settings


def _module(**overrides):
    values = {
        "SECRET_KEY": "k",
        "QR_SECRET": "s1",
        "ORG_TIMEZONE": "America/Guayaquil",
        "ATTENDANCE_WINDOW": {"start": "07:00", "end": "09:30"},
        "STORAGE_BACKEND": "memory",
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_settings_module_follows_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    assert get_settings_module() == "config.testing"
    monkeypatch.setenv("APP_ENV", "prod")
    assert get_settings_module() == "config.production"
    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"


def test_testing_settings_load():
    settings = load_settings(config.testing)

    assert settings.storage_backend == "memory"
    assert settings.qr_secret == "s1"
    assert str(settings.tz) == "America/Guayaquil"
    assert settings.default_geofence.radius_meters == 100
    assert settings.gps.maximum_age_seconds == 30
    assert settings.default_employee_type == EmployeeType.REMOTE


def test_defaults_when_keys_are_missing():
    settings = load_settings(SimpleNamespace(SECRET_KEY="k", QR_SECRET="s1"))

    assert settings.window.display() == "7:00 AM - 9:30 AM"
    assert settings.storage_backend == "mysql"
    assert settings.default_geofence.latitude == -0.1807


@pytest.mark.parametrize(
    "overrides",
    [
        {"ATTENDANCE_WINDOW": {"start": "22:00", "end": "02:00"}},
        {"ORG_TIMEZONE": "Mars/Olympus"},
        {"STORAGE_BACKEND": "firestore"},
        {"DEFAULT_EMPLOYEE_TYPE": "hybrid"},
        {"DEFAULT_GEOFENCE": {"lat": 0, "lng": 0, "radius_meters": 0}},
        {"GPS_CONFIG": {"timeout_seconds": "soon"}},
    ],
)
def test_invalid_settings_raise(overrides):
    with pytest.raises(ConfigurationError):
        load_settings(_module(**overrides))


def test_missing_qr_secret_is_warned(caplog):
    with caplog.at_level(logging.WARNING):
        settings = load_settings(_module(QR_SECRET=""))

    assert settings.qr_secret is None
    assert "QR_SECRET" in caplog.text
