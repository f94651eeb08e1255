from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from linkfast import application as application_module
from linkfast.application import LinkFast, application
from linkfast.constants import ShortCode
from linkfast.dao.cache import HotCacheDAO
from linkfast.services import ClickTracker, ShortcodeGenerator
from linkfast.utils.config import DEFAULT_CONFIG, _deep_merge
from linkfast.utils.helpers import is_valid_shortcode


class TestLinkFast:
    def test_short_url_uses_configured_base_url(self, dao, cache: HotCacheDAO, tracker: ClickTracker):
        linkfast = LinkFast(dao, cache, tracker, base_url='https://lf.example.org/')
        event = {'requestContext': {'domainName': 'links.example.com', 'stage': 'Prod'}}

        assert linkfast.short_url('abcD1234', event) == 'https://lf.example.org/abcD1234'

    @pytest.mark.parametrize(
        'event, expected',
        [
            ({'requestContext': {'domainName': 'links.example.com', 'stage': 'Prod'}}, 'https://links.example.com/abcD1234'),
            ({}, 'http://localhost:3000/abcD1234'),
            (None, 'http://localhost:3000/abcD1234'),
        ],
    )
    def test_short_url_from_event(self, dao, cache: HotCacheDAO, tracker: ClickTracker, event, expected: str):
        assert LinkFast(dao, cache, tracker).short_url('abcD1234', event) == expected

    def test_close_releases_everything_once(self, dao):
        cache = MagicMock(spec=HotCacheDAO)
        tracker = MagicMock(spec=ClickTracker)
        linkfast = LinkFast(dao, cache, tracker)

        linkfast.close()
        linkfast.close()

        tracker.close.assert_called_once_with(wait=True)
        cache.close.assert_called_once()
        assert dao.closed

    def test_context_manager(self, dao):
        cache = MagicMock(spec=HotCacheDAO)
        tracker = MagicMock(spec=ClickTracker)

        with LinkFast(dao, cache, tracker) as linkfast:
            assert linkfast.shortener.dao is dao
            assert linkfast.redirector.tracker is tracker

        tracker.close.assert_called_once()

    def test_services_share_cache_ttl(self, dao, cache: HotCacheDAO, tracker: ClickTracker):
        linkfast = LinkFast(dao, cache, tracker, cache_ttl=42)
        assert linkfast.shortener.cache_ttl == 42
        assert linkfast.redirector.cache_ttl == 42


class TestFromConfig:
    @pytest.fixture
    def config(self) -> dict:
        # fmt: off
        return _deep_merge(DEFAULT_CONFIG, {
            'app': {'base_url': 'https://links.example.com'},
            'redis': {'host': 'redis.test', 'port': 6380},
            'cache': {'ttl': 60, 'cleanup_interval': 0, 'maxsize': 10},
            'shortener': {'max_attempts': 3},
            'clicks': {'max_workers': 2},
        })
        # fmt: on

    def test_from_config(self, monkeypatch: MonkeyPatch, config: dict, dao):
        dao_cls = MagicMock(return_value=dao)
        monkeypatch.setattr(application_module, 'ShortURLRedisDAO', dao_cls)
        monkeypatch.setattr(application_module, 'app_prefix', lambda: 'linkfast:test')

        with LinkFast.from_config(config) as linkfast:
            dao_cls.assert_called_once_with(
                redis_host='redis.test',
                redis_port=6380,
                redis_db=0,
                redis_username=None,
                redis_password=None,
                redis_connect_timeout=1.0,
                prefix='linkfast:test',
            )
            assert linkfast.base_url == 'https://links.example.com'
            assert linkfast.cache.default_ttl == 60
            assert linkfast.cache.maxsize == 10
            assert linkfast.shortener.cache_ttl == 60
            assert isinstance(linkfast.shortener.generator, ShortcodeGenerator)
            assert linkfast.shortener.generator.max_attempts == 3
            assert linkfast.shortener.generator.length == ShortCode.LENGTH
            assert is_valid_shortcode(linkfast.shortener.shorten('openai.com').shortcode)

        assert dao.closed


class TestApplication:
    @pytest.fixture(autouse=True)
    def reset_instance(self, monkeypatch: MonkeyPatch):
        monkeypatch.setattr(application_module, '_instance', None)

    def test_application_is_created_once(self, monkeypatch: MonkeyPatch, dao, cache: HotCacheDAO, tracker: ClickTracker):
        from_config = MagicMock(return_value=LinkFast(dao, cache, tracker))
        registered = []
        monkeypatch.setattr(LinkFast, 'from_config', from_config)
        monkeypatch.setattr(application_module, 'load_config', lambda: DEFAULT_CONFIG)
        monkeypatch.setattr(application_module.atexit, 'register', registered.append)

        first = application()
        second = application()

        assert first is second
        from_config.assert_called_once_with(DEFAULT_CONFIG)
        assert registered == [first.close]
