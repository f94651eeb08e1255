from linkfast.dao.cache.hot_cache_dao import HotCacheDAO

__all__ = [
    'HotCacheDAO',
]
