"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_LATE_THRESHOLD = time(10, 0)
DEFAULT_CHART_WINDOW_DAYS = 14
DEFAULT_FETCH_RETRIES = 3
DEFAULT_FETCH_RETRY_BACKOFF_SECONDS = 1.0
DEFAULT_PERSIST_WORKERS = 4
DEFAULT_PERSIST_WAIT_SECONDS = 5.0
DEFAULT_DEPARTMENT = "General"
DURATION_DECIMALS = 2
