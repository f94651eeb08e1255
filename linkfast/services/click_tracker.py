"""Background click counting

Redirects must not wait for the click counter write. ClickTracker hands every
increment to a small thread pool and returns immediately; the caller never gets
a handle, and failures are logged instead of propagated or retried.

With the default single worker, increments from this process are applied one
after another, so N sequential redirects settle at click_count == N. With more
workers (or several processes sharing one store), concurrent increments for the
same short code may overwrite each other (see ShortURLRedisDAO.hit).
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait as wait_futures

from linkfast.constants import Defaults
from linkfast.dao.base import ShortURLBaseDAO
from linkfast.dao.exceptions import ShortURLNotFoundError, DataStoreError


logger = logging.getLogger(__name__)


class ClickTracker:
    def __init__(self, dao: ShortURLBaseDAO, max_workers: int = Defaults.CLICK_WORKERS):
        self.dao = dao
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='linkfast-clicks')
        self._pending: set[Future] = set()
        self._lock = threading.Lock()
        self._closed = False

    def track(self, shortcode: str) -> None:
        """Schedule a click counter increment for shortcode (fire-and-forget)"""
        with self._lock:
            if self._closed:
                logger.warning('Click tracker is closed, dropping click.', extra={'shortcode': shortcode})
                return
            future = self._executor.submit(self._hit, shortcode)
            self._pending.add(future)
        future.add_done_callback(self._forget)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the currently pending increments settle

        Returns:
            bool: True if everything settled, False if the timeout expired first.
        """
        with self._lock:
            pending = set(self._pending)
        _, not_done = wait_futures(pending, timeout=timeout)
        return not not_done

    def close(self, wait: bool = True) -> None:
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=wait)
        logger.debug('Click tracker closed.')

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def _hit(self, shortcode: str) -> None:
        try:
            clicks = self.dao.hit(shortcode)
        except ShortURLNotFoundError:
            logger.warning('Dropped click for a short code without record.', extra={'shortcode': shortcode})
        except DataStoreError:
            logger.exception('Failed to increment click counter.', extra={'shortcode': shortcode})
        except Exception:
            logger.exception('Unexpected error while incrementing click counter.', extra={'shortcode': shortcode})
        else:
            logger.debug('Incremented click counter.', extra={'shortcode': shortcode, 'clicks': clicks})
