import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timetrack_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

LATE_THRESHOLD = "10:00"
CHART_WINDOW_DAYS = 14

FETCH_RETRIES = 3
FETCH_RETRY_BACKOFF_SECONDS = 0.0

PERSIST_WORKERS = 2
PERSIST_WAIT_SECONDS = 5.0

AUTO_INIT_DB = False
