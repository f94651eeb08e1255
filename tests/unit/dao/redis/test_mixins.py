from unittest.mock import patch

import pytest
import redis

from linkfast.dao.exceptions import DataStoreError
from linkfast.dao.redis.mixins import RedisClientMixin


class TestRedisClientMixin:
    @pytest.fixture
    def unhealthy_redis_client(self, redis_client: redis.Redis) -> redis.Redis:
        redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')
        return redis_client

    def test_healthcheck_passes_with_healthy_redis(self, redis_client: redis.Redis):
        mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')

        redis_client.ping.assert_called_once()  # initialization performs a healthcheck
        assert mixin.keys.url_record_key('abcD1234') == 'testapp:test:urls:abcD1234'

    def test_healthcheck_fails_with_unhealthy_redis(self, unhealthy_redis_client: redis.Redis):
        with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0"):
            RedisClientMixin(redis_client=unhealthy_redis_client, prefix='testapp:test')

    def test_healthcheck_without_raising(self, redis_client: redis.Redis):
        mixin = RedisClientMixin(redis_client=redis_client)
        redis_client.ping.side_effect = redis.exceptions.TimeoutError('Timeout')

        assert mixin._healthcheck(raise_error=False) is False

    def test_creates_client_with_connect_timeout(self, redis_client: redis.Redis):
        with patch('linkfast.dao.redis.mixins.redis.Redis', return_value=redis_client) as redis_cls:
            RedisClientMixin(redis_host='redis.test', redis_port='6380', redis_db=2, redis_connect_timeout=0.5)

        redis_cls.assert_called_once_with(
            host='redis.test',
            port=6380,
            db=2,
            decode_responses=True,
            username=None,
            password=None,
            socket_connect_timeout=0.5,
        )

    def test_close(self, redis_client: redis.Redis):
        RedisClientMixin(redis_client=redis_client).close()
        redis_client.close.assert_called_once()
