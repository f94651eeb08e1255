"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO. Each entry
of the two store buckets is a plain Redis string under its own key:

    <prefix>:urls:<short code>       -> URL record (JSON)
    <prefix>:reverse:<original URL>  -> short code

Responsibilities:
    - Insert a URL record and its reverse index entry atomically (check-and-set);
    - Retrieve URL records by short code and short codes by original URL;
    - Increment per-link click counters transactionally;
    - Translate Redis failures into DAO exceptions.

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving URLRecord in a Redis datastore.

Example:
    >>> from datetime import datetime, UTC
    >>> from linkfast.models import URLRecord
    >>> from linkfast.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix='linkfast:dev')

    >>> record = URLRecord(
    ...     target='https://example.com/page',
    ...     shortcode='abcD1234',
    ...     created_at=datetime.now(UTC),
    ... )
    >>> dao.insert(record)
    <ShortURLRedisDAO>

    >>> dao.get('abcD1234').target
    'https://example.com/page'
    >>> dao.lookup('https://example.com/page')
    'abcD1234'
    >>> dao.hit('abcD1234')
    1
"""

import logging

import redis
from beartype import beartype

from linkfast.constants import Defaults
from linkfast.models import URLRecord
from linkfast.dao.base import ShortURLBaseDAO
from linkfast.dao.redis.mixins import RedisClientMixin
from linkfast.dao.redis.helpers import handle_redis_connection_error, serialize_record, deserialize_record
from linkfast.dao.exceptions import (
    ShortURLAlreadyExistsError,
    ShortURLNotFoundError,
    TargetURLAlreadyExistsError,
    TransactionConflictError,
)


logger = logging.getLogger(__name__)


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL records

    This class implements the ShortURLBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        max_transaction_retries (int):
            How many times insert() and hit() retry after losing a WATCH race.

    Methods:
        insert(record: URLRecord, **kwargs) -> ShortURLRedisDAO:
            Insert a URL record and its reverse index entry in one transaction.
            Raises ShortURLAlreadyExistsError when the short code is taken.
            Raises TargetURLAlreadyExistsError when the target URL already has a short code.
            Raises TransactionConflictError when concurrent writers keep winning.
            Raises DataStoreError on connectivity issues with Redis.

        get(shortcode: str, **kwargs) -> URLRecord:
            Retrieve a URL record by short code.
            Raises ShortURLNotFoundError when the short code doesn't exist.

        exists(shortcode: str, **kwargs) -> bool:
            Check whether a short code is taken.

        lookup(target: str, **kwargs) -> str | None:
            Reverse index lookup by exact target URL string.

        hit(shortcode: str, **kwargs) -> int:
            Increment the click counter of a URL record in one transaction and return the new value.
            Raises ShortURLNotFoundError when the short code doesn't exist.
            Raises TransactionConflictError when concurrent increments keep winning.
    """

    def __init__(self, *args, max_transaction_retries: int = Defaults.REDIS_TRANSACTION_RETRIES, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_transaction_retries = max_transaction_retries

    @handle_redis_connection_error
    @beartype
    def insert(self, record: URLRecord, **kwargs) -> 'ShortURLRedisDAO':
        """Insert a URL record and its reverse index entry into Redis

        The insertion is an optimistic check-and-set transaction: the record key
        of this short code and the reverse index key of this target URL are
        WATCHed, both are re-checked, then both SETs are queued in a single
        MULTI/EXEC block. If another writer touches either key in between, EXEC
        fails with a WatchError and the whole check-and-set is retried. Writes
        to other records (e.g. click increments) don't interfere.

        Args:
            record (URLRecord):
                URLRecord instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            TargetURLAlreadyExistsError:
                If the target URL is already mapped to a short code.
            ShortURLAlreadyExistsError:
                If a record with the same short code already exists.
            TransactionConflictError:
                If the transaction lost the WATCH race max_transaction_retries times.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        record_key = self.keys.url_record_key(record.shortcode)
        reverse_key = self.keys.reverse_index_key(record.target)

        # NOTE: Without the WATCH, two concurrent inserts for the same target URL
        #       could both miss the reverse index and both write a record:
        #
        #       (thread 1): GET <app>:reverse:<url>  => nil
        #       (thread 2): GET <app>:reverse:<url>  => nil
        #       (thread 1): SET <app>:urls:<code1> ...; SET <app>:reverse:<url> <code1>
        #       (thread 2): SET <app>:urls:<code2> ...; SET <app>:reverse:<url> <code2>
        #
        #       which leaves <code1> as a record without a reverse index entry.
        #       With the WATCH, thread 2's EXEC aborts, the retry sees <code1>
        #       and raises TargetURLAlreadyExistsError instead.
        with self.redis.pipeline(transaction=True) as pipe:
            for attempt in range(1, self.max_transaction_retries + 1):
                try:
                    pipe.watch(record_key, reverse_key)

                    existing_shortcode = pipe.get(reverse_key)
                    if existing_shortcode is not None:
                        if isinstance(existing_shortcode, bytes):
                            existing_shortcode = existing_shortcode.decode()
                        raise TargetURLAlreadyExistsError(
                            f"Target URL '{record.target}' is already shortened as '{existing_shortcode}'.",
                            shortcode=existing_shortcode,
                        )
                    if pipe.exists(record_key):
                        raise ShortURLAlreadyExistsError(f"Short URL with code '{record.shortcode}' already exists.")

                    pipe.multi()
                    pipe.set(record_key, serialize_record(record))
                    pipe.set(reverse_key, record.shortcode)
                    pipe.execute()
                except redis.exceptions.WatchError:
                    logger.debug(
                        'Lost insert transaction race, retrying.',
                        extra={'shortcode': record.shortcode, 'attempt': attempt},
                    )
                    continue
                else:
                    return self

        raise TransactionConflictError(
            f"Couldn't insert short URL '{record.shortcode}' after {self.max_transaction_retries} conflicting transactions."
        )

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> URLRecord:
        """Retrieve a stored URL record by short code

        Args:
            shortcode (str):
                The short code identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            URLRecord:
                The retrieved URLRecord instance if found.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur or the stored record is malformed.
        """
        blob = self.redis.get(self.keys.url_record_key(shortcode))
        if blob is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return deserialize_record(blob)

    @handle_redis_connection_error
    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        return bool(self.redis.exists(self.keys.url_record_key(shortcode)))

    @handle_redis_connection_error
    @beartype
    def lookup(self, target: str, **kwargs) -> str | None:
        shortcode = self.redis.get(self.keys.reverse_index_key(target))
        if isinstance(shortcode, bytes):
            shortcode = shortcode.decode()
        return shortcode

    @handle_redis_connection_error
    @beartype
    def hit(self, shortcode: str, **kwargs) -> int:
        """Increment the click counter of a URL record

        The increment reads the full record, bumps click_count and writes it back
        inside a WATCH/MULTI/EXEC transaction on the record key. A concurrent
        increment of the same record makes EXEC fail with a WatchError, and the
        read-modify-write is retried on the fresh record:

              (thread 1): WATCH <app>:urls:<code>; GET  => click_count = 41
              (thread 2): WATCH <app>:urls:<code>; GET  => click_count = 41
              (thread 1): MULTI; SET {... 42 ...}; EXEC => OK
              (thread 2): MULTI; SET {... 42 ...}; EXEC => nil (WatchError)
              (thread 2): WATCH <app>:urls:<code>; GET  => click_count = 42
              (thread 2): MULTI; SET {... 43 ...}; EXEC => OK

        Args:
            shortcode (str):
                The short code of the URL record.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            int:
                The click counter after the increment.

        Raises:
            ShortURLNotFoundError:
                If no URL record with the given short code exists.
            TransactionConflictError:
                If the increment lost the WATCH race max_transaction_retries times.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.hit('abcD1234')
            42
        """
        record_key = self.keys.url_record_key(shortcode)

        with self.redis.pipeline(transaction=True) as pipe:
            for attempt in range(1, self.max_transaction_retries + 1):
                try:
                    pipe.watch(record_key)

                    blob = pipe.get(record_key)
                    if blob is None:
                        raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
                    record = deserialize_record(blob).clicked()

                    pipe.multi()
                    pipe.set(record_key, serialize_record(record))
                    pipe.execute()
                except redis.exceptions.WatchError:
                    logger.debug(
                        'Lost click increment race, retrying.',
                        extra={'shortcode': shortcode, 'attempt': attempt},
                    )
                    continue
                else:
                    return record.click_count

        raise TransactionConflictError(
            f"Couldn't increment clicks of short URL '{shortcode}' after {self.max_transaction_retries} conflicting transactions."
        )
