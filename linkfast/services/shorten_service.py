"""Create-short-URL orchestration

Procedure:
    1. Normalize the URL (prefix https:// unless it already has an http(s) scheme)
    2. Validate it as an absolute URL
    3. Return the existing short code if the exact URL was shortened before
    4. Generate a fresh short code and persist the record with its reverse entry
    5. Copy the mapping into the hot cache

Example:
    >>> service = ShortenService(dao, cache)
    >>> result = service.shorten('openai.com')
    >>> result.target
    'https://openai.com'
    >>> service.shorten('openai.com').shortcode == result.shortcode
    True
"""

import logging
from datetime import datetime, UTC

from linkfast.models import URLRecord, ShortenResult
from linkfast.dao.base import ShortURLBaseDAO
from linkfast.dao.cache import HotCacheDAO
from linkfast.dao.exceptions import (
    DataStoreError,
    ShortURLAlreadyExistsError,
    TargetURLAlreadyExistsError,
)
from linkfast.exceptions import InvalidURLError, PersistenceError
from linkfast.services.shortcode_generator import ShortcodeGenerator
from linkfast.utils.helpers import normalize_url, is_valid_url


logger = logging.getLogger(__name__)


class ShortenService:
    def __init__(
        self,
        dao: ShortURLBaseDAO,
        cache: HotCacheDAO,
        generator: ShortcodeGenerator | None = None,
        cache_ttl: int | float | None = None,
    ):
        self.dao = dao
        self.cache = cache
        self.generator = generator or ShortcodeGenerator(dao)
        self.cache_ttl = cache_ttl

    def shorten(self, url: str) -> ShortenResult:
        """Return the short code for url, creating a record only when needed

        Raises:
            InvalidURLError: If the normalized URL isn't an absolute URL.
            ShortcodeGenerationError: If no unique short code could be generated.
            PersistenceError: If the new record couldn't be stored.
        """
        # 1- Normalize & validate
        target = normalize_url(url)
        if not is_valid_url(target):
            raise InvalidURLError(f"'{target}' is not a valid absolute URL.")

        # 2- Deduplicate on the exact URL string
        existing = self._lookup(target)
        if existing is not None:
            logger.debug('URL was shortened before.', extra={'shortcode': existing})
            return ShortenResult(shortcode=existing, target=target, created=False)

        # 3- Generate a short code & persist the record
        shortcode = self.generator.generate(target)
        record = URLRecord(target=target, shortcode=shortcode, created_at=datetime.now(UTC))
        try:
            self.dao.insert(record)
        except TargetURLAlreadyExistsError as e:
            # Another caller stored the same URL between our lookup and insert
            logger.info('URL was shortened concurrently, reusing its short code.', extra={'shortcode': e.shortcode})
            return ShortenResult(shortcode=e.shortcode, target=target, created=False)
        except (ShortURLAlreadyExistsError, DataStoreError) as e:
            raise PersistenceError(f"Couldn't store short URL record for '{target}'.") from e

        # 4- Warm the hot cache
        self.cache.set(shortcode, target, self.cache_ttl)
        logger.info('Shortened URL.', extra={'shortcode': shortcode})
        return ShortenResult(shortcode=shortcode, target=target, created=True)

    def _lookup(self, target: str) -> str | None:
        try:
            return self.dao.lookup(target)
        except DataStoreError:
            # NOTE: insert() re-checks the reverse index inside its transaction,
            #       so proceeding to creation can't produce a duplicate record.
            logger.warning('Reverse index lookup failed, proceeding to create a record.', exc_info=True)
            return None
