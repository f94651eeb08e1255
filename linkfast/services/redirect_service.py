import logging

from linkfast.dao.base import ShortURLBaseDAO
from linkfast.dao.cache import HotCacheDAO
from linkfast.dao.exceptions import CacheMissError, ShortURLNotFoundError
from linkfast.exceptions import ShortcodeNotFoundError
from linkfast.services.click_tracker import ClickTracker


logger = logging.getLogger(__name__)


class RedirectService:
    """Resolve short codes to original URLs

    The hot cache is consulted first; on a miss the persistent store is read
    and the cache is populated. Either way a click counter increment is
    scheduled in the background before the URL is returned.

    DataStoreError raised by the store propagates to the caller.
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        cache: HotCacheDAO,
        tracker: ClickTracker,
        cache_ttl: int | float | None = None,
    ):
        self.dao = dao
        self.cache = cache
        self.tracker = tracker
        self.cache_ttl = cache_ttl

    def resolve(self, shortcode: str) -> str:
        try:
            target = self.cache.get(shortcode)
        except CacheMissError:
            target = self._load(shortcode)
        else:
            logger.debug('Hot cache hit.', extra={'shortcode': shortcode})

        self.tracker.track(shortcode)
        return target

    def _load(self, shortcode: str) -> str:
        try:
            record = self.dao.get(shortcode)
        except ShortURLNotFoundError as e:
            raise ShortcodeNotFoundError(f"Short code '{shortcode}' doesn't exist.") from e

        logger.debug('Loaded short URL record from data store.', extra={'shortcode': shortcode})
        self.cache.set(shortcode, record.target, self.cache_ttl)
        return record.target
