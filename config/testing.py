SECRET_KEY = "test-secret"

QR_SECRET = "s1"

ORG_TIMEZONE = "America/Guayaquil"

ATTENDANCE_WINDOW = {"start": "07:00", "end": "09:30"}

DEFAULT_GEOFENCE = {"lat": -0.1807, "lng": -78.4678, "radius_meters": 100.0}

GPS_CONFIG = {"timeout_seconds": 10, "maximum_age_seconds": 30, "high_accuracy": True}

DEFAULT_EMPLOYEE_TYPE = "remote"

STORAGE_BACKEND = "memory"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "qr_attendance_test",
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_FILE = ""

AUTO_INIT_DB = False
AUTO_SEED_DB = False
