from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

LOCAL_TIMEZONE = "Africa/Accra"
FACE_MATCH_THRESHOLD = 0.7
