"""
Distributed cache implementation using Redis.

Stores serialized JSON payloads with SETEX so every entry carries its own
expiry. Backend failures are raised as ``CacheException``; deciding whether
a failure is fatal is left to the caller.
"""

from typing import Optional

import redis.asyncio as redis
import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..domain.exceptions import CacheException
from .cache_store import ICacheStore

logger = structlog.get_logger(__name__)


class RedisCacheStore(ICacheStore):
    """
    Cache store backed by Redis.

    Supports:
    - TTL-based expiration
    - Connection pooling
    - Optional key prefix for namespacing
    - Hit/miss/error counters
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        prefix: str = "",
        max_connections: int = 50,
        socket_timeout: float = 5.0,
        socket_connect_timeout: float = 5.0,
        client: Optional[Redis] = None,
    ):
        """
        Initialize Redis cache.

        Args:
            redis_url: Redis connection URL
            prefix: Key prefix for namespacing
            max_connections: Maximum connections in pool
            socket_timeout: Socket read/write timeout
            socket_connect_timeout: Socket connection timeout
            client: Pre-built client, skips ``connect``
        """
        self.redis_url = redis_url
        self.prefix = prefix
        self.max_connections = max_connections
        self.socket_timeout = socket_timeout
        self.socket_connect_timeout = socket_connect_timeout
        self.client: Optional[Redis] = client

        self.hits = 0
        self.misses = 0
        self.errors = 0

    async def connect(self) -> None:
        """Establish Redis connection with connection pooling."""
        if self.client is not None:
            return

        self.client = redis.from_url(
            self.redis_url,
            max_connections=self.max_connections,
            socket_timeout=self.socket_timeout,
            socket_connect_timeout=self.socket_connect_timeout,
            decode_responses=True,
            encoding="utf-8",
        )
        try:
            await self.client.ping()
        except RedisError as e:
            # The service still starts; reads fall through to the store
            logger.warning(
                "Redis not reachable at startup",
                redis_url=self.redis_url.split("@")[-1],
                error=str(e),
            )
            return

        logger.info("Redis cache connected", max_connections=self.max_connections)

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info("Redis cache disconnected")

    def _make_key(self, key: str) -> str:
        """Generate namespaced cache key."""
        return f"{self.prefix}{key}"

    def _require_client(self, operation: str) -> Redis:
        if self.client is None:
            self.errors += 1
            raise CacheException(operation, "Redis not connected")
        return self.client

    async def get(self, key: str) -> Optional[str]:
        client = self._require_client("get")
        try:
            data = await client.get(self._make_key(key))
        except RedisError as e:
            self.errors += 1
            raise CacheException("get", str(e)) from e

        if data is None:
            self.misses += 1
            logger.debug("Cache MISS", key=key)
            return None

        self.hits += 1
        logger.debug("Cache HIT", key=key)
        return data if isinstance(data, str) else data.decode("utf-8")

    async def set(self, key: str, value: str, ttl: int) -> None:
        client = self._require_client("set")
        try:
            await client.setex(self._make_key(key), ttl, value)
        except RedisError as e:
            self.errors += 1
            raise CacheException("set", str(e)) from e
        logger.debug("Cache SET", key=key, ttl=ttl)

    async def delete(self, key: str) -> bool:
        client = self._require_client("delete")
        try:
            result = await client.delete(self._make_key(key))
        except RedisError as e:
            self.errors += 1
            raise CacheException("delete", str(e)) from e
        logger.debug("Cache DELETE", key=key)
        return result > 0

    async def ping(self) -> bool:
        if self.client is None:
            return False
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False

    async def get_stats(self) -> dict:
        """Get cache statistics."""
        total = self.hits + self.misses
        hit_rate = (self.hits / total * 100) if total > 0 else 0

        stats = {
            "backend": "redis",
            "hits": self.hits,
            "misses": self.misses,
            "errors": self.errors,
            "total_requests": total,
            "hit_rate_percent": round(hit_rate, 2),
        }

        if self.client:
            try:
                info = await self.client.info("stats")
                stats["redis_total_commands"] = info.get("total_commands_processed", 0)
            except RedisError:
                pass

        return stats
