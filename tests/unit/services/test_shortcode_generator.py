from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from linkfast.models import URLRecord
from linkfast.dao.base import ShortURLBaseDAO
from linkfast.dao.exceptions import DataStoreError
from linkfast.exceptions import ShortcodeGenerationError, ShortcodeGenerationExhaustedError
from linkfast.services import ShortcodeGenerator
from linkfast.services import shortcode_generator


TIMESTAMP_NS = 1_700_000_000_000_000_000


class TestShortcodeGenerator:
    def test_generate(self, dao):
        generator = ShortcodeGenerator(dao, clock=lambda: TIMESTAMP_NS)
        assert generator.generate('https://example.com') == 'r25h7cPM'

    def test_generate_with_real_clock(self, dao):
        shortcode = ShortcodeGenerator(dao).generate('https://example.com')
        assert len(shortcode) == 8
        assert shortcode.isalnum() and shortcode.isascii()

    def test_generate_retries_on_collision(self, dao, record: URLRecord, caplog: pytest.LogCaptureFixture):
        dao.urls['r25h7cPM'] = record
        generator = ShortcodeGenerator(dao, clock=lambda: TIMESTAMP_NS)

        assert generator.generate('https://example.com') == '0bsFVOMe'
        assert 'collides with an existing record' in caplog.text

    def test_timestamps_strictly_increase(self, dao, monkeypatch: MonkeyPatch):
        timestamps = []

        def fake_generate_shortcode(url: str, timestamp_ns: int, length: int = 8) -> str:
            timestamps.append(timestamp_ns)
            return 'abcD1234'

        monkeypatch.setattr(shortcode_generator, 'generate_shortcode', fake_generate_shortcode)
        dao_mock = cast(ShortURLBaseDAO, MagicMock(spec=ShortURLBaseDAO))
        dao_mock.exists.side_effect = [True, True, False, False]
        generator = ShortcodeGenerator(dao_mock, clock=lambda: 100)

        generator.generate('https://example.com')
        generator.generate('https://example.com')

        assert timestamps == [100, 101, 102, 103]

    def test_generate_exhausted(self):
        dao_mock = cast(ShortURLBaseDAO, MagicMock(spec=ShortURLBaseDAO))
        dao_mock.exists.return_value = True
        generator = ShortcodeGenerator(dao_mock, max_attempts=5)

        with pytest.raises(ShortcodeGenerationExhaustedError, match='in 5 attempts'):
            generator.generate('https://example.com')
        assert dao_mock.exists.call_count == 5

    def test_exhausted_is_a_generation_error(self):
        assert issubclass(ShortcodeGenerationExhaustedError, ShortcodeGenerationError)

    def test_generate_with_data_store_error(self, dao):
        dao.failing.add('exists')
        generator = ShortcodeGenerator(dao)

        with pytest.raises(ShortcodeGenerationError) as exc_info:
            generator.generate('https://example.com')
        assert isinstance(exc_info.value.__cause__, DataStoreError)

    def test_custom_length(self, dao):
        generator = ShortcodeGenerator(dao, length=4, clock=lambda: TIMESTAMP_NS)
        assert generator.generate('https://example.com') == 'r25h'

    @pytest.mark.parametrize('max_attempts', [0, -3])
    def test_invalid_max_attempts(self, dao, max_attempts: int):
        with pytest.raises(ValueError, match='max_attempts must be a positive integer'):
            ShortcodeGenerator(dao, max_attempts=max_attempts)
