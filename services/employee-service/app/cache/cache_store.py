"""
Cache store interface (Abstract Base Class).

Defines the key-value contract the cache-aside coordinator relies on,
independent of the backend. Values are serialized JSON text.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ICacheStore(ABC):
    """
    Key-value cache with per-key expiry.

    Implementations raise ``CacheException`` on backend failure. A missing
    or expired key is not a failure: ``get`` returns None.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None on miss
        """

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int) -> None:
        """
        Set value in cache with a time-to-live.

        Args:
            key: Cache key
            value: Serialized payload
            ttl: Time-to-live in seconds
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete key from cache.

        Returns:
            True if a key was removed, False if it was absent
        """

    @abstractmethod
    async def ping(self) -> bool:
        """Return True when the backend is reachable."""

    async def close(self) -> None:
        """Release backend resources."""
