import functools
from collections.abc import Callable

from linkfast.constants import Bucket


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for the store's buckets.

    Every entry of a bucket lives under its own key, so transactions only
    WATCH the entries they touch:

        <prefix>:urls:<short code>        -> URL record (JSON)
        <prefix>:reverse:<original URL>   -> short code

    An optional prefix can be provided to namespace all generated keys,
    e.g. "linkfast:prod" or "linkfast:local".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def url_record_key(self, shortcode: str) -> str:
        return f'{Bucket.URLS}:{shortcode}'

    @prefix_key
    def reverse_index_key(self, target: str) -> str:
        return f'{Bucket.REVERSE}:{target}'
