import threading
import time
from datetime import datetime, UTC

import pytest

from linkfast.models import URLRecord
from linkfast.dao.base import ShortURLBaseDAO
from linkfast.dao.cache import HotCacheDAO
from linkfast.dao.exceptions import (
    DataStoreError,
    ShortURLAlreadyExistsError,
    ShortURLNotFoundError,
    TargetURLAlreadyExistsError,
)
from linkfast.services import ClickTracker


class InMemoryShortURLDAO(ShortURLBaseDAO):
    """Dict-backed ShortURLBaseDAO for service tests

    Methods listed in `failing` raise DataStoreError, emulating an unreachable store.
    `hit_delay` widens the read-modify-write window of hit() to expose lost updates.
    """

    def __init__(self):
        self.urls: dict[str, URLRecord] = {}
        self.reverse: dict[str, str] = {}
        self.failing: set[str] = set()
        self.hit_delay = 0.0
        self.closed = False
        self._lock = threading.Lock()

    def _check(self, method: str) -> None:
        if method in self.failing:
            raise DataStoreError(f'{method} failed: data store unavailable.')

    def insert(self, record: URLRecord, **kwargs) -> 'InMemoryShortURLDAO':
        self._check('insert')
        with self._lock:
            if record.target in self.reverse:
                raise TargetURLAlreadyExistsError('Target URL already shortened.', shortcode=self.reverse[record.target])
            if record.shortcode in self.urls:
                raise ShortURLAlreadyExistsError('Short code already taken.')
            self.urls[record.shortcode] = record
            self.reverse[record.target] = record.shortcode
        return self

    def get(self, shortcode: str, **kwargs) -> URLRecord:
        self._check('get')
        try:
            return self.urls[shortcode]
        except KeyError as e:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.") from e

    def exists(self, shortcode: str, **kwargs) -> bool:
        self._check('exists')
        return shortcode in self.urls

    def lookup(self, target: str, **kwargs) -> str | None:
        self._check('lookup')
        return self.reverse.get(target)

    def hit(self, shortcode: str, **kwargs) -> int:
        self._check('hit')
        record = self.get(shortcode)
        if self.hit_delay:
            time.sleep(self.hit_delay)
        record = record.clicked()
        self.urls[shortcode] = record
        return record.click_count

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def dao() -> InMemoryShortURLDAO:
    return InMemoryShortURLDAO()


@pytest.fixture
def cache():
    cache = HotCacheDAO(default_ttl=300, cleanup_interval=0)
    yield cache
    cache.close()


@pytest.fixture
def tracker(dao: InMemoryShortURLDAO):
    tracker = ClickTracker(dao)
    yield tracker
    tracker.close()


@pytest.fixture
def record() -> URLRecord:
    return URLRecord(
        target='https://example.com/blog/chuck-norris-is-awesome',
        shortcode='abcD1234',
        created_at=datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC),
    )
