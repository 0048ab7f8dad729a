"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ACTIVE_CALLS_POLL_SECONDS = 2
TIME_CLOCK_POLL_SECONDS = 30
FUEL_POLL_SECONDS = 30

COUPON_CODE_LENGTH = 8
COUPON_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

DEFAULT_TRIAL_DAYS = 14
DEFAULT_MAX_USERS = 5
MIN_ADMIN_PASSWORD_LENGTH = 8

DEFAULT_QUERY_STALE_SECONDS = 300
DEFAULT_QUERY_CACHE_MAX_ITEMS = 5000
