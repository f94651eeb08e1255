"""LinkFast application container

LinkFast owns the long-lived resources of a process (persistent store client,
hot cache with its cleanup thread, click tracker pool) and the two services
built on top of them. It is opened once and closed once; Lambda handlers reuse
one instance across warm invocations through `application()`.

Example:
    >>> from linkfast.utils import load_config
    >>> with LinkFast.from_config(load_config()) as linkfast:
    ...     result = linkfast.shortener.shorten('openai.com')
    ...     linkfast.redirector.resolve(result.shortcode)
    'https://openai.com'
"""

import atexit
import logging
import threading

from linkfast.types import AppConfiguration, LambdaEvent
from linkfast.dao.base import ShortURLBaseDAO
from linkfast.dao.cache import HotCacheDAO
from linkfast.dao.redis import ShortURLRedisDAO
from linkfast.services import ShortcodeGenerator, ClickTracker, ShortenService, RedirectService
from linkfast.utils.config import load_config, app_prefix
from linkfast.utils.helpers import base_url as event_base_url, get_short_url


logger = logging.getLogger(__name__)


class LinkFast:
    def __init__(
        self,
        dao: ShortURLBaseDAO,
        cache: HotCacheDAO,
        tracker: ClickTracker,
        base_url: str | None = None,
        cache_ttl: int | float | None = None,
        generator: ShortcodeGenerator | None = None,
    ):
        self.dao = dao
        self.cache = cache
        self.tracker = tracker
        self.base_url = base_url
        self.shortener = ShortenService(dao, cache, generator=generator, cache_ttl=cache_ttl)
        self.redirector = RedirectService(dao, cache, tracker, cache_ttl=cache_ttl)
        self._closed = False

    @classmethod
    def from_config(cls, config: AppConfiguration) -> 'LinkFast':
        """Open the Redis store, start the hot cache and create the click tracker

        Raises:
            DataStoreError: If Redis isn't reachable.
        """
        redis_config = {f'redis_{k}': v for k, v in config['redis'].items()}
        cache_config = config['cache']
        shortener_config = config['shortener']

        dao = ShortURLRedisDAO(**redis_config, prefix=app_prefix())
        cache = HotCacheDAO(
            default_ttl=cache_config['ttl'],
            cleanup_interval=cache_config['cleanup_interval'],
            maxsize=cache_config['maxsize'],
        ).start()
        tracker = ClickTracker(dao, max_workers=config['clicks']['max_workers'])
        generator = ShortcodeGenerator(dao, max_attempts=shortener_config['max_attempts'])

        logger.info('Opened LinkFast application.', extra={'prefix': app_prefix()})
        return cls(
            dao,
            cache,
            tracker,
            base_url=config['app'].get('base_url'),
            cache_ttl=cache_config['ttl'],
            generator=generator,
        )

    def short_url(self, shortcode: str, event: LambdaEvent | None = None) -> str:
        """Return the public short URL of shortcode

        The configured base URL wins; otherwise it's derived from the API Gateway event.
        """
        base = self.base_url or event_base_url(event or {})
        return get_short_url(shortcode, base)

    def close(self) -> None:
        """Drain pending click increments, stop the cache and release the store (idempotent)"""
        if self._closed:
            return
        self._closed = True

        self.tracker.close(wait=True)
        self.cache.close()
        self.dao.close()
        logger.info('Closed LinkFast application.')

    def __enter__(self) -> 'LinkFast':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


_instance: LinkFast | None = None
_instance_lock = threading.Lock()


def application() -> LinkFast:
    """Return the process-wide LinkFast instance, creating it on first use"""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = LinkFast.from_config(load_config())
            atexit.register(_instance.close)
        return _instance
