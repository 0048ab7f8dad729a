import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:5000"),
    "token": os.getenv("API_TOKEN", ""),
    "timeout_seconds": int(os.getenv("API_TIMEOUT_SECONDS", "30")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

QUERY_STALE_SECONDS = int(os.getenv("QUERY_STALE_SECONDS", "300"))
QUERY_CACHE_MAX_ITEMS = int(os.getenv("QUERY_CACHE_MAX_ITEMS", "5000"))
