import os

from overtime_tracker.core.constants import DEFAULT_TECHNICIANS

from . import env_bool, env_list

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "overtime_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", False)

TECHNICIANS = env_list("TECHNICIANS", DEFAULT_TECHNICIANS)
ENFORCE_ROSTER = env_bool("ENFORCE_ROSTER", True)
REQUIRE_DESCRIPTION = env_bool("REQUIRE_DESCRIPTION", False)

BULK_DELETE_CODE = os.getenv("BULK_DELETE_CODE", "23")
DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "America/Guayaquil")
