"""Typed view of a settings module (see `config/`).

`load_settings` is the only place that reads the raw module; the rest of the
package receives an `AppSettings` (or pieces of it) through the container.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import ModuleType
from typing import Optional
from zoneinfo import ZoneInfo

from .attendance.time_window import AttendanceWindow
from .common.datetime_utils import load_timezone
from .core.constants import (
    DEFAULT_GEOFENCE_LAT,
    DEFAULT_GEOFENCE_LNG,
    DEFAULT_GEOFENCE_RADIUS_METERS,
    DEFAULT_ORG_TIMEZONE,
    DEFAULT_QR_SECRET,
    DEFAULT_WINDOW_END,
    DEFAULT_WINDOW_START,
)
from .core.enums import EmployeeType
from .core.exceptions import ConfigurationError
from .geofence.geolocation import GpsOptions
from .geofence.model import GeofenceConfig

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class AppSettings:
    secret_key: str
    qr_secret: Optional[str]
    tz: ZoneInfo
    window: AttendanceWindow
    default_geofence: GeofenceConfig
    gps: GpsOptions
    default_employee_type: EmployeeType
    storage_backend: str
    db_config: dict = field(default_factory=dict)
    auto_init_db: bool = False
    auto_seed_db: bool = False
    debug: bool = False
    testing: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None


def _geofence(raw: Optional[dict]) -> GeofenceConfig:
    raw = raw or {}
    try:
        config = GeofenceConfig(
            latitude=float(raw.get("lat", DEFAULT_GEOFENCE_LAT)),
            longitude=float(raw.get("lng", DEFAULT_GEOFENCE_LNG)),
            radius_meters=float(raw.get("radius_meters", DEFAULT_GEOFENCE_RADIUS_METERS)),
        )
    except (TypeError, ValueError):
        raise ConfigurationError("DEFAULT_GEOFENCE needs numeric 'lat', 'lng' and 'radius_meters'") from None
    if not (-90.0 <= config.latitude <= 90.0 and -180.0 <= config.longitude <= 180.0):
        raise ConfigurationError("DEFAULT_GEOFENCE coordinates are out of range")
    if config.radius_meters <= 0:
        raise ConfigurationError("DEFAULT_GEOFENCE radius must be greater than 0")
    return config


def _gps(raw: Optional[dict]) -> GpsOptions:
    if not raw:
        return GpsOptions()
    defaults = GpsOptions()
    try:
        options = GpsOptions(
            timeout_seconds=float(raw.get("timeout_seconds", defaults.timeout_seconds)),
            maximum_age_seconds=float(raw.get("maximum_age_seconds", defaults.maximum_age_seconds)),
            high_accuracy=bool(raw.get("high_accuracy", defaults.high_accuracy)),
        )
    except (TypeError, ValueError):
        raise ConfigurationError("GPS_CONFIG values must be numeric") from None
    if options.timeout_seconds <= 0 or options.maximum_age_seconds < 0:
        raise ConfigurationError("GPS_CONFIG timeout must be positive and maximum age not negative")
    return options


def load_settings(module: ModuleType) -> AppSettings:
    qr_secret = getattr(module, "QR_SECRET", None) or None
    if qr_secret is None or qr_secret == DEFAULT_QR_SECRET:
        logger.warning("QR_SECRET is not set; daily codes are derived from the built-in default secret")

    default_type = str(getattr(module, "DEFAULT_EMPLOYEE_TYPE", EmployeeType.REMOTE.value)).strip().lower()
    try:
        employee_type = EmployeeType(default_type)
    except ValueError:
        raise ConfigurationError(f"Unknown DEFAULT_EMPLOYEE_TYPE: {default_type!r}") from None

    backend = str(getattr(module, "STORAGE_BACKEND", "mysql")).strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ConfigurationError(f"STORAGE_BACKEND must be one of {STORAGE_BACKENDS}, got {backend!r}")

    window_raw = getattr(module, "ATTENDANCE_WINDOW", None) or {
        "start": DEFAULT_WINDOW_START,
        "end": DEFAULT_WINDOW_END,
    }

    return AppSettings(
        secret_key=str(getattr(module, "SECRET_KEY")),
        qr_secret=qr_secret,
        tz=load_timezone(getattr(module, "ORG_TIMEZONE", DEFAULT_ORG_TIMEZONE)),
        window=AttendanceWindow.from_config(window_raw),
        default_geofence=_geofence(getattr(module, "DEFAULT_GEOFENCE", None)),
        gps=_gps(getattr(module, "GPS_CONFIG", None)),
        default_employee_type=employee_type,
        storage_backend=backend,
        db_config=dict(getattr(module, "DB_CONFIG", {}) or {}),
        auto_init_db=bool(getattr(module, "AUTO_INIT_DB", False)),
        auto_seed_db=bool(getattr(module, "AUTO_SEED_DB", False)),
        debug=bool(getattr(module, "DEBUG", False)),
        testing=bool(getattr(module, "TESTING", False)),
        log_level=str(getattr(module, "LOG_LEVEL", "INFO")),
        log_file=getattr(module, "LOG_FILE", None) or None,
    )
