import json
import functools
from datetime import datetime

import redis

from linkfast.models import URLRecord
from linkfast.dao.exceptions import DataStoreError


__all__ = []


def describe_connection(client: redis.Redis) -> str:
    """Return 'host:port/db' of the server a client talks to"""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.ConnectionError
            or redis.exceptions.TimeoutError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def exists(self, shortcode):
        ...     return self.redis.exists(f'urls:{shortcode}')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {describe_connection(self.redis)}.") from e

    return wrapper


def serialize_record(record: URLRecord) -> str:
    """Serialize a URLRecord into the persisted JSON layout."""
    return json.dumps(
        {
            'id': record.id,
            'original_url': record.target,
            'short_code': record.shortcode,
            'created_at': record.created_at.isoformat(),
            'click_count': record.click_count,
        }
    )


def deserialize_record(blob: str | bytes) -> URLRecord:
    """Deserialize a persisted JSON blob into a URLRecord.

    Raises:
        DataStoreError:
            If the stored blob is not a valid record.
    """
    try:
        data = json.loads(blob)
        return URLRecord(
            target=data['original_url'],
            shortcode=data['short_code'],
            created_at=datetime.fromisoformat(data['created_at']),
            click_count=int(data.get('click_count', 0)),
            id=int(data.get('id', 0)),
        )
    except (TypeError, ValueError, KeyError) as e:
        raise DataStoreError(f'Malformed URL record in data store: {blob!r}') from e
