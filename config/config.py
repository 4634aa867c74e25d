import os


class Config:
    """Shared settings; each environment module exports the values it needs."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "kiosk-dev-secret"

    # Database
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "kiosk_attendance")
    DB_CONNECT_TIMEOUT_SECONDS = float(os.environ.get("DB_CONNECT_TIMEOUT_SECONDS", "5"))

    # Dev helpers
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Attendance rules
    LOCAL_TIMEZONE = os.environ.get("LOCAL_TIMEZONE", "Africa/Accra")
    FACE_MATCH_THRESHOLD = float(os.environ.get("FACE_MATCH_THRESHOLD", "0.7"))
    USER_ID_PATTERN = os.environ.get("USER_ID_PATTERN", r"^\d{3}$")
    STAFF_CACHE_TTL_SECONDS = float(os.environ.get("STAFF_CACHE_TTL_SECONDS", "30"))
    LOCATIONS_TTL_SECONDS = float(os.environ.get("LOCATIONS_TTL_SECONDS", "300"))

    # Face recognition service (CompreFace)
    COMPREFACE_URL = os.environ.get("COMPREFACE_URL", "http://localhost:8000")
    COMPREFACE_API_KEY = os.environ.get("COMPREFACE_API_KEY", "")
    FACE_ORACLE_TIMEOUT_SECONDS = float(os.environ.get("FACE_ORACLE_TIMEOUT_SECONDS", "5"))

    # Kiosk frames are posted as base64 JSON
    MAX_CONTENT_LENGTH = 12 * 1024 * 1024

    PORT = int(os.environ.get("PORT", "3000"))

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
            "connect_timeout": cls.DB_CONNECT_TIMEOUT_SECONDS,
        }


# Module-level names read by create_app()
SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = Config.db_config()
DEBUG = bool(int(os.environ.get("DEBUG", "1")))

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB

LOG_LEVEL = Config.LOG_LEVEL
LOCAL_TIMEZONE = Config.LOCAL_TIMEZONE
FACE_MATCH_THRESHOLD = Config.FACE_MATCH_THRESHOLD
USER_ID_PATTERN = Config.USER_ID_PATTERN
STAFF_CACHE_TTL_SECONDS = Config.STAFF_CACHE_TTL_SECONDS
LOCATIONS_TTL_SECONDS = Config.LOCATIONS_TTL_SECONDS
COMPREFACE_URL = Config.COMPREFACE_URL
COMPREFACE_API_KEY = Config.COMPREFACE_API_KEY
FACE_ORACLE_TIMEOUT_SECONDS = Config.FACE_ORACLE_TIMEOUT_SECONDS
MAX_CONTENT_LENGTH = Config.MAX_CONTENT_LENGTH
PORT = Config.PORT
