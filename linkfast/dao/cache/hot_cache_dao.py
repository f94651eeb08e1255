"""In-memory hot cache for short code -> original URL mappings

The hot cache keeps recently used mappings in process memory so the redirect path
can skip the persistent store. Cached values are derived copies of immutable
mappings, so entries are only ever evicted passively (TTL expiry or size bound),
never invalidated.

Responsibilities:
    - Store values with a per-entry TTL (default TTL when none is given)
    - Raise CacheMissError for missing and expired entries
    - Periodically evict expired entries from a background daemon thread
    - Stay safe under concurrent use from request threads

Classes:
    HotCacheDAO:
        Thread-safe TTL cache backed by cachetools.TLRUCache.

Example:
    >>> cache = HotCacheDAO(default_ttl=300, cleanup_interval=600).start()
    >>> cache.set('abcD1234', 'https://example.com')
    >>> cache.get('abcD1234')
    'https://example.com'
    >>> cache.get('zzzzzzzz')
    Traceback (most recent call last):
        ...
    linkfast.dao.exceptions.CacheMissError: Key 'zzzzzzzz' not found in hot cache.
    >>> cache.close()
"""

import time
import logging
import threading
from typing import NamedTuple

from beartype import beartype
from cachetools import TLRUCache

from linkfast.constants import TTL, Defaults
from linkfast.dao.exceptions import CacheMissError


logger = logging.getLogger(__name__)


class _Entry(NamedTuple):
    value: str
    ttl: float


def _monotonic() -> float:
    # Looked up on every call so that patched clocks (e.g. freezegun) are honored
    return time.monotonic()


def _time_to_use(key: str, entry: _Entry, now: float) -> float:
    return now + entry.ttl


class HotCacheDAO:
    """Thread-safe in-memory TTL cache

    Attributes:
        default_ttl (float):
            Lifetime in seconds of entries set without an explicit TTL.
        cleanup_interval (float):
            Seconds between background evictions of expired entries.
            A value <= 0 disables the background cleanup thread.
        maxsize (int):
            Upper bound on the number of entries. Least recently used entries
            are evicted first once the bound is reached.

    Methods:
        set(key: str, value: str, ttl: float | None = None) -> None
        get(key: str) -> str
        expire() -> int
        start() -> HotCacheDAO
        close() -> None
    """

    def __init__(
        self,
        default_ttl: float = TTL.CACHE_DEFAULT,
        cleanup_interval: float = TTL.CACHE_CLEANUP,
        maxsize: int = Defaults.CACHE_MAXSIZE,
    ):
        self.default_ttl = default_ttl
        self.cleanup_interval = cleanup_interval
        self.maxsize = maxsize

        self._cache = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=_monotonic)
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._cleaner: threading.Thread | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    @beartype
    def set(self, key: str, value: str, ttl: int | float | None = None) -> None:
        """Cache a value under key for ttl seconds (default_ttl when None)"""
        entry = _Entry(value=value, ttl=self.default_ttl if ttl is None else ttl)
        with self._lock:
            self._cache[key] = entry

    @beartype
    def get(self, key: str) -> str:
        """Return the cached value for key

        Raises:
            CacheMissError:
                If the key was never cached, has expired, or was evicted.
        """
        with self._lock:
            entry = self._cache.get(key)
        if entry is None:
            raise CacheMissError(f"Key '{key}' not found in hot cache.")
        return entry.value

    def expire(self) -> int:
        """Evict all expired entries now and return how many were evicted"""
        with self._lock:
            return len(self._cache.expire())

    def start(self) -> 'HotCacheDAO':
        """Start the background cleanup thread (idempotent)"""
        if self.cleanup_interval <= 0 or self._cleaner is not None:
            return self

        self._stop.clear()
        self._cleaner = threading.Thread(target=self._run_cleanup, name='linkfast-cache-cleanup', daemon=True)
        self._cleaner.start()
        logger.debug('Started hot cache cleanup thread.', extra={'cleanupInterval': self.cleanup_interval})
        return self

    def close(self) -> None:
        self._stop.set()
        if self._cleaner is not None:
            self._cleaner.join(timeout=5)
            self._cleaner = None
        logger.debug('Stopped hot cache cleanup thread.')

    def _run_cleanup(self) -> None:
        while not self._stop.wait(self.cleanup_interval):
            evicted = self.expire()
            if evicted:
                logger.debug('Evicted expired hot cache entries.', extra={'evicted': evicted})
