"""Abstract base class for short URL data access objects (DAOs).

This class establishes a consistent contract for all short URL DAO implementations,
regardless of the underlying key-value store.

The store keeps two named collections ("buckets"):
    - urls:    short code   -> URL record
    - reverse: original URL -> short code

Responsibilities:
    - Provide point lookups by short code and by original URL.
    - Create a URL record and its reverse index entry as one atomic unit.
    - Increment click counters.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from datetime import datetime, UTC
        >>> from linkfast.models import URLRecord
        >>> from linkfast.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(prefix='linkfast:local')
        >>> record = URLRecord(
        ...     target='https://example.com/blog/article-123',
        ...     shortcode='a1b2C3d4',
        ...     created_at=datetime.now(UTC),
        ... )
        >>> dao.insert(record)

        >>> dao.lookup('https://example.com/blog/article-123')
        'a1b2C3d4'
        >>> dao.hit('a1b2C3d4')
        1
"""

from abc import ABC, abstractmethod

from linkfast.models import URLRecord


class ShortURLBaseDAO(ABC):
    """Interface for short URL data access objects (DAOs).

    Methods:
        insert(record: URLRecord, **kwargs) -> ShortURLBaseDAO:
            Atomically store a record and its reverse index entry.
            Raises ShortURLAlreadyExistsError if the short code is taken.
            Raises TargetURLAlreadyExistsError if the target URL is already indexed.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> URLRecord:
            Retrieve a record by short code.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        exists(shortcode: str, **kwargs) -> bool:
            Check whether a short code is taken.

        lookup(target: str, **kwargs) -> str | None:
            Reverse index lookup: short code of an original URL, or None.

        hit(shortcode: str, **kwargs) -> int:
            Increment the click counter and return its new value.
            Raises ShortURLNotFoundError if the entry does not exist.

        close() -> None:
            Release the underlying store handle.

    NOTE:
        - Records are never deleted or expired, so the DAO does not provide
          a delete operation.
    """

    @abstractmethod
    def insert(self, record: URLRecord, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new URLRecord together with its reverse index entry.

        Args:
            record (URLRecord):
                The record to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a record with the same short code already exists.

            TargetURLAlreadyExistsError:
                If the target URL already has a short code.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> URLRecord:
        """Retrieve a URLRecord from the data store by its short code.

        Raises:
            ShortURLNotFoundError:
                If no record with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def exists(self, shortcode: str, **kwargs) -> bool:
        """Return True if a record with the given short code exists."""
        pass

    @abstractmethod
    def lookup(self, target: str, **kwargs) -> str | None:
        """Return the short code mapped to an exact target URL string, or None."""
        pass

    @abstractmethod
    def hit(self, shortcode: str, **kwargs) -> int:
        """Increment the click counter of a record.

        Returns:
            int: The click counter after the increment.

        Raises:
            ShortURLNotFoundError:
                If no record with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def close(self) -> None:  # noqa: B027
        """Release the data store handle. No-op by default."""
