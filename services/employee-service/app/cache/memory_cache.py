"""
In-memory cache backend.

TTL-based cache with LRU eviction, used when no Redis instance is
configured and as a test double for the coordinator.

Note: state is per process. Run a single instance when using this backend.
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Dict, Optional

import structlog

from .cache_store import ICacheStore

logger = structlog.get_logger(__name__)


@dataclass
class CacheEntry:
    """A cached value with expiration time."""

    value: str
    expires_at: float


class MemoryCacheStore(ICacheStore):
    """
    Thread-safe in-memory cache with TTL and LRU eviction.

    An entry set at time T with ttl N is never returned at or after T + N.

    Attributes:
        max_size: Maximum number of entries
    """

    def __init__(
        self,
        max_size: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize cache.

        Args:
            max_size: Maximum number of entries before LRU eviction
            clock: Source of the current time in seconds
        """
        self.max_size = max_size
        self._clock = clock
        self._cache: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = Lock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    async def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._cache.get(key)

            if entry is None:
                self.misses += 1
                return None

            if self._clock() >= entry.expires_at:
                del self._cache[key]
                self.misses += 1
                logger.debug("Cache entry expired", key=key)
                return None

            # Move to end (most recently used)
            self._cache.move_to_end(key)
            self.hits += 1
            return entry.value

    async def set(self, key: str, value: str, ttl: int) -> None:
        expires_at = self._clock() + ttl

        with self._lock:
            if key in self._cache:
                del self._cache[key]

            while len(self._cache) >= self.max_size:
                oldest_key = next(iter(self._cache))
                del self._cache[oldest_key]
                self.evictions += 1
                logger.debug("Cache LRU eviction", evicted_key=oldest_key)

            self._cache[key] = CacheEntry(value=value, expires_at=expires_at)

    async def delete(self, key: str) -> bool:
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    async def ping(self) -> bool:
        return True

    def clear(self) -> None:
        """Clear all entries from cache."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with hit rate, size, and other stats
        """
        with self._lock:
            total = self.hits + self.misses
            hit_rate = (self.hits / total * 100) if total > 0 else 0.0

            return {
                "backend": "memory",
                "size": len(self._cache),
                "max_size": self.max_size,
                "hits": self.hits,
                "misses": self.misses,
                "hit_rate_percent": round(hit_rate, 2),
                "evictions": self.evictions,
            }
