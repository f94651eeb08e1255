from typing import cast

import pytest

from linkfast.types import LambdaContext
from linkfast.application import LinkFast
from linkfast.dao.cache import HotCacheDAO
from linkfast.services import ClickTracker, ShortcodeGenerator


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'linkfast'})


@pytest.fixture
def linkfast(dao, cache: HotCacheDAO, tracker: ClickTracker):
    generator = ShortcodeGenerator(dao, clock=lambda: 0)
    with LinkFast(dao, cache, tracker, generator=generator) as linkfast:
        yield linkfast
