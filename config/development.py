import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timetrack"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Attendance policy
LATE_THRESHOLD = os.getenv("LATE_THRESHOLD", "10:00")
CHART_WINDOW_DAYS = int(os.getenv("CHART_WINDOW_DAYS", "14"))

# Session load right after sign-in may race the profile row
FETCH_RETRIES = int(os.getenv("FETCH_RETRIES", "3"))
FETCH_RETRY_BACKOFF_SECONDS = float(os.getenv("FETCH_RETRY_BACKOFF_SECONDS", "1.0"))

PERSIST_WORKERS = int(os.getenv("PERSIST_WORKERS", "4"))
PERSIST_WAIT_SECONDS = float(os.getenv("PERSIST_WAIT_SECONDS", "5.0"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
