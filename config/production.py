import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "wage_tracker"),
}

TIMEZONE = os.getenv("TIMEZONE", "UTC")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
COOKIE_SECURE = bool(int(os.getenv("COOKIE_SECURE", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
