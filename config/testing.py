import os

SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://backend.test"),
    "token": os.getenv("API_TOKEN", "test-token"),
    "timeout_seconds": 5,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

QUERY_STALE_SECONDS = 300
QUERY_CACHE_MAX_ITEMS = 500
