from linkfast.dao.redis.redis_key_schema import RedisKeySchema
from linkfast.dao.redis.short_url_redis_dao import ShortURLRedisDAO
from linkfast.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'ShortURLRedisDAO',
    'RedisClientMixin',
]
