"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Deployment-specific values are overridden through the config package.
"""

EARTH_RADIUS_KM = 6371.0
DEFAULT_RADIUS_METERS = 150.0

FACE_MATCH_THRESHOLD = 0.7
DEFAULT_FACE_ORACLE_TIMEOUT_SECONDS = 5.0

DEFAULT_STAFF_CACHE_TTL_SECONDS = 30.0
DEFAULT_LOCATIONS_TTL_SECONDS = 300.0

DEFAULT_LOCAL_TIMEZONE = "Africa/Accra"
DEFAULT_USER_ID_PATTERN = r"^\d{3}$"
