import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Shared secret the daily QR code is derived from
QR_SECRET = os.getenv("QR_SECRET", "")

ORG_TIMEZONE = os.getenv("ORG_TIMEZONE", "America/Guayaquil")

ATTENDANCE_WINDOW = {
    "start": os.getenv("ATTENDANCE_WINDOW_START", "07:00"),
    "end": os.getenv("ATTENDANCE_WINDOW_END", "09:30"),
}

# Used until an admin stores a geofence
DEFAULT_GEOFENCE = {
    "lat": float(os.getenv("GEOFENCE_LAT", "-0.1807")),
    "lng": float(os.getenv("GEOFENCE_LNG", "-78.4678")),
    "radius_meters": float(os.getenv("GEOFENCE_RADIUS_METERS", "100")),
}

GPS_CONFIG = {
    "timeout_seconds": 10,
    "maximum_age_seconds": 30,
    "high_accuracy": True,
}

DEFAULT_EMPLOYEE_TYPE = os.getenv("DEFAULT_EMPLOYEE_TYPE", "remote")

# 'mysql' or 'memory'
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "qr_attendance"),
}

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo users on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
