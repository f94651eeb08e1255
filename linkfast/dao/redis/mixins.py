"""Shared Redis client lifecycle for Redis-backed DAOs

A DAO mixing in RedisClientMixin gets:
    - `self.redis`: a client built once from connection parameters (or injected)
    - `self.keys`: a RedisKeySchema bound to the application prefix
    - a PING on construction, so an unreachable server fails fast as DataStoreError
    - `close()`, which releases the client's connection pool

Example:
    >>> class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    ...     ...
    >>> dao = ShortURLRedisDAO(redis_host='localhost', prefix='linkfast:local')
    >>> dao.keys.url_record_key('abcD1234')
    'linkfast:local:urls:abcD1234'
    >>> dao.close()
"""

import logging

import redis

from linkfast.constants import Defaults
from linkfast.dao.redis.redis_key_schema import RedisKeySchema
from linkfast.dao.redis.helpers import describe_connection
from linkfast.dao.exceptions import DataStoreError


logger = logging.getLogger(__name__)


class RedisClientMixin:
    """Own a Redis client and a key schema on behalf of a DAO

    Connection arguments are prefixed with `redis_` so they can be splatted
    straight from the `redis` configuration section:

        >>> redis_config = {f'redis_{k}': v for k, v in config['redis'].items()}
        >>> dao = ShortURLRedisDAO(**redis_config, prefix=app_prefix())

    A pre-built client passed as `redis_client` takes precedence over the
    connection arguments (tests inject mocks this way).

    Raises:
        DataStoreError: If the initial PING fails.
    """

    def __init__(
        self,
        redis_host: str | None = 'localhost',
        redis_port: int | str | None = 6379,
        redis_db: int | str | None = 0,
        redis_decode_responses: bool | None = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_connect_timeout: float | None = Defaults.REDIS_CONNECT_TIMEOUT,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                socket_connect_timeout=redis_connect_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING the server; return False (or raise DataStoreError) when it's unreachable"""
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if not raise_error:
                return False
            raise DataStoreError(
                f"Can't connect to Redis at {describe_connection(self.redis)}. Check the provided configuration parameters."
            ) from e
        return True

    def close(self) -> None:
        self.redis.close()
        logger.debug('Closed Redis client.')
