import time
import logging
import threading
from collections.abc import Callable

from linkfast.constants import ShortCode
from linkfast.dao.base import ShortURLBaseDAO
from linkfast.dao.exceptions import DataStoreError
from linkfast.exceptions import ShortcodeGenerationError, ShortcodeGenerationExhaustedError
from linkfast.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


class ShortcodeGenerator:
    """Generate short codes which aren't used by any stored URL record

    Each attempt hashes the URL together with a fresh nanosecond timestamp and
    checks the resulting code against the data store. Collisions are astronomically
    unlikely, so the number of attempts is bounded.

    NOTE: The existence check and the later insert are separate steps. Another
          writer may take the same code in between; the store's insert
          transaction rejects that case with ShortURLAlreadyExistsError.

    Example:
        >>> generator = ShortcodeGenerator(dao, clock=lambda: 1_700_000_000_000_000_000)
        >>> generator.generate('https://example.com')
        'r25h7cPM'
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        length: int = ShortCode.LENGTH,
        max_attempts: int = ShortCode.MAX_ATTEMPTS,
        clock: Callable[[], int] = time.time_ns,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

        self.dao = dao
        self.length = length
        self.max_attempts = max_attempts
        self._clock = clock
        self._last_timestamp: int | None = None
        self._lock = threading.Lock()

    def generate(self, url: str) -> str:
        """Return a short code for url which no stored record uses

        Raises:
            ShortcodeGenerationError:
                If the data store can't be read during the uniqueness check.
            ShortcodeGenerationExhaustedError:
                If every attempt collided with an existing short code.
        """
        for attempt in range(1, self.max_attempts + 1):
            shortcode = generate_shortcode(url, self._timestamp(), length=self.length)

            try:
                taken = self.dao.exists(shortcode)
            except DataStoreError as e:
                raise ShortcodeGenerationError(f"Couldn't check short code '{shortcode}' for uniqueness.") from e

            if not taken:
                return shortcode

            logger.warning(
                'Generated short code collides with an existing record.',
                extra={'shortcode': shortcode, 'attempt': attempt},
            )

        raise ShortcodeGenerationExhaustedError(f"Couldn't generate a unique short code for '{url}' in {self.max_attempts} attempts.")

    def _timestamp(self) -> int:
        # Retries must hash a different timestamp, even on coarse clocks
        with self._lock:
            now = self._clock()
            if self._last_timestamp is not None and now <= self._last_timestamp:
                now = self._last_timestamp + 1
            self._last_timestamp = now
            return now
