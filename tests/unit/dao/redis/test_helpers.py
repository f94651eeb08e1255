import re
from datetime import datetime, UTC

import pytest
import redis

from linkfast.models import URLRecord
from linkfast.dao.exceptions import DataStoreError
from linkfast.dao.redis.helpers import handle_redis_connection_error, serialize_record, deserialize_record


class FakeDAO:
    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    @handle_redis_connection_error
    def read(self, error: Exception | None = None) -> str:
        if error is not None:
            raise error
        return 'ok'


class TestHandleRedisConnectionError:
    @pytest.fixture
    def dao(self, redis_client: redis.Redis) -> FakeDAO:
        return FakeDAO(redis_client)

    def test_passes_through_result(self, dao: FakeDAO):
        assert dao.read() == 'ok'

    @pytest.mark.parametrize(
        'error',
        [
            redis.exceptions.ConnectionError('Connection refused'),
            redis.exceptions.TimeoutError('Timeout connecting to server'),
        ],
    )
    def test_translates_connectivity_errors(self, dao: FakeDAO, error: Exception):
        with pytest.raises(DataStoreError, match=re.escape("Can't connect to Redis at redis.test:6379/0.")) as exc_info:
            dao.read(error)
        assert exc_info.value.__cause__ is error

    def test_other_errors_propagate(self, dao: FakeDAO):
        with pytest.raises(redis.exceptions.ResponseError):
            dao.read(redis.exceptions.ResponseError('WRONGTYPE'))

    def test_preserves_method_metadata(self):
        assert FakeDAO.read.__name__ == 'read'


class TestRecordSerialization:
    def test_serialize_record_layout(self):
        record = URLRecord(
            target='https://openai.com',
            shortcode='xks0Ks3f',
            created_at=datetime(2025, 3, 4, 5, 6, 7, tzinfo=UTC),
            click_count=3,
        )

        assert serialize_record(record) == (
            '{"id": 0, "original_url": "https://openai.com", "short_code": "xks0Ks3f", '
            '"created_at": "2025-03-04T05:06:07+00:00", "click_count": 3}'
        )

    def test_deserialize_record(self):
        blob = (
            b'{"id": 0, "original_url": "https://openai.com", "short_code": "xks0Ks3f", '
            b'"created_at": "2025-03-04T05:06:07+00:00", "click_count": 3}'
        )

        record = deserialize_record(blob)

        assert record.target == 'https://openai.com'
        assert record.shortcode == 'xks0Ks3f'
        assert record.created_at == datetime(2025, 3, 4, 5, 6, 7, tzinfo=UTC)
        assert record.click_count == 3

    @pytest.mark.parametrize(
        'blob',
        [
            'not json',
            '{"original_url": "https://openai.com"}',
            '{"original_url": "https://openai.com", "short_code": "xks0Ks3f", "created_at": "yesterday"}',
        ],
    )
    def test_deserialize_malformed_record(self, blob: str):
        with pytest.raises(DataStoreError, match='Malformed URL record'):
            deserialize_record(blob)