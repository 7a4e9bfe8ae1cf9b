import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "timetrack"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timetrack"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LATE_THRESHOLD = os.getenv("LATE_THRESHOLD", "10:00")
CHART_WINDOW_DAYS = int(os.getenv("CHART_WINDOW_DAYS", "14"))

FETCH_RETRIES = int(os.getenv("FETCH_RETRIES", "3"))
FETCH_RETRY_BACKOFF_SECONDS = float(os.getenv("FETCH_RETRY_BACKOFF_SECONDS", "1.0"))

PERSIST_WORKERS = int(os.getenv("PERSIST_WORKERS", "8"))
PERSIST_WAIT_SECONDS = float(os.getenv("PERSIST_WAIT_SECONDS", "5.0"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
