import string
from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Hot cache default entry lifetime (5 minutes)
    CACHE_DEFAULT = 300
    # Hot cache background cleanup cadence (10 minutes)
    CACHE_CLEANUP = 600


class ShortCode:
    """Short code format."""

    ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
    BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits
    LENGTH = 8
    PATTERN = r'^[a-zA-Z0-9]{8}$'
    MAX_ATTEMPTS = 5


class Bucket(StrEnum):
    """Named key-value collections in the persistent store."""

    URLS = 'urls'  # short code -> serialized URL record
    REVERSE = 'reverse'  # original URL -> short code


class Defaults:
    """Default tuning values."""

    REDIS_CONNECT_TIMEOUT = 1.0  # seconds
    REDIS_TRANSACTION_RETRIES = 10
    CACHE_MAXSIZE = 100_000
    CLICK_WORKERS = 1
    LOCAL_BASE_URL = 'http://localhost:3000'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        LOG_LEVEL = 'LOG_LEVEL'
        CONFIG_PATH = 'LINKFAST_CONFIG'
        BASE_URL = 'BASE_URL'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
