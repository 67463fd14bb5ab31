"""
Cache layer.

Backends implementing ``ICacheStore`` and the key namespace used by the
cache-aside coordinator.
"""

from ..config import Settings
from .cache_store import ICacheStore
from .memory_cache import MemoryCacheStore
from .redis_cache import RedisCacheStore

__all__ = [
    "ICacheStore",
    "MemoryCacheStore",
    "RedisCacheStore",
    "build_cache_store",
]


def build_cache_store(settings: Settings) -> ICacheStore:
    """
    Build the cache backend selected by ``CACHE_BACKEND``.

    The Redis store still needs ``await store.connect()`` before use.
    """
    if settings.CACHE_BACKEND == "memory":
        return MemoryCacheStore(max_size=settings.MEMORY_CACHE_MAX_SIZE)

    return RedisCacheStore(
        redis_url=settings.REDIS_URL,
        prefix=settings.CACHE_KEY_PREFIX,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=settings.REDIS_SOCKET_CONNECT_TIMEOUT,
    )
