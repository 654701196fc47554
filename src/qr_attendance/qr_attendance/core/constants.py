"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

QR_SALT = "attendance_qr_v1"
QR_CODE_LENGTH = 12
DEFAULT_QR_SECRET = "default_secret_change_this"

DEFAULT_ORG_TIMEZONE = "America/Guayaquil"
DEFAULT_WINDOW_START = "07:00"
DEFAULT_WINDOW_END = "09:30"

DEFAULT_GEOFENCE_LAT = -0.1807
DEFAULT_GEOFENCE_LNG = -78.4678
DEFAULT_GEOFENCE_RADIUS_METERS = 100.0

GPS_TIMEOUT_SECONDS = 10
GPS_MAXIMUM_AGE_SECONDS = 30
GPS_CLOCK_SKEW_SECONDS = 5

SYSTEM_CONFIG_ID = "main"
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_RANKING_LIMIT = 10
MINUTES_PER_DAY = 24 * 60
