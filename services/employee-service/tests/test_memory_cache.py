"""
Tests for the in-memory cache backend.

Covers TTL expiry at the exact boundary, LRU eviction and statistics.
"""

import pytest

from app.cache.memory_cache import MemoryCacheStore


@pytest.fixture
def memory_cache(clock):
    """Create a fresh memory cache for testing."""
    return MemoryCacheStore(max_size=3, clock=clock)


class TestCacheBasicOperations:
    """Test basic cache operations."""

    @pytest.mark.asyncio
    async def test_get_set(self, memory_cache):
        assert await memory_cache.get("employees:all") is None

        await memory_cache.set("employees:all", "[]", ttl=600)

        assert await memory_cache.get("employees:all") == "[]"

    @pytest.mark.asyncio
    async def test_set_overwrites(self, memory_cache):
        await memory_cache.set("employee:1", '{"id":1}', ttl=600)
        await memory_cache.set("employee:1", '{"id":1,"name":"x"}', ttl=600)

        assert await memory_cache.get("employee:1") == '{"id":1,"name":"x"}'
        assert len(memory_cache) == 1

    @pytest.mark.asyncio
    async def test_delete(self, memory_cache):
        await memory_cache.set("employee:1", "{}", ttl=600)

        assert await memory_cache.delete("employee:1") is True
        assert await memory_cache.get("employee:1") is None

    @pytest.mark.asyncio
    async def test_delete_nonexistent_key(self, memory_cache):
        assert await memory_cache.delete("employee:404") is False

    @pytest.mark.asyncio
    async def test_ping(self, memory_cache):
        assert await memory_cache.ping() is True


class TestTTLExpiry:
    """Test entries are never served once their TTL has elapsed."""

    @pytest.mark.asyncio
    async def test_served_before_ttl(self, memory_cache, clock):
        await memory_cache.set("departments:all", "[]", ttl=600)
        clock.advance(599.999)

        assert await memory_cache.get("departments:all") == "[]"

    @pytest.mark.asyncio
    async def test_not_served_at_ttl_boundary(self, memory_cache, clock):
        await memory_cache.set("departments:all", "[]", ttl=600)
        clock.advance(600)

        assert await memory_cache.get("departments:all") is None

    @pytest.mark.asyncio
    async def test_expired_entry_is_removed(self, memory_cache, clock):
        await memory_cache.set("departments:all", "[]", ttl=10)
        clock.advance(11)

        await memory_cache.get("departments:all")

        assert len(memory_cache) == 0
        assert memory_cache.misses == 1

    @pytest.mark.asyncio
    async def test_reset_restarts_ttl(self, memory_cache, clock):
        await memory_cache.set("employees:all", "[1]", ttl=600)
        clock.advance(500)
        await memory_cache.set("employees:all", "[2]", ttl=600)
        clock.advance(500)

        assert await memory_cache.get("employees:all") == "[2]"


class TestLRUEviction:
    """Test LRU eviction policy."""

    @pytest.mark.asyncio
    async def test_evicts_least_recently_used(self, memory_cache):
        await memory_cache.set("A", "a", ttl=600)
        await memory_cache.set("B", "b", ttl=600)
        await memory_cache.set("C", "c", ttl=600)

        # Touch A so B becomes the oldest
        await memory_cache.get("A")
        await memory_cache.set("D", "d", ttl=600)

        assert await memory_cache.get("B") is None
        assert await memory_cache.get("A") == "a"
        assert memory_cache.evictions == 1


class TestStatistics:
    """Test cache statistics."""

    @pytest.mark.asyncio
    async def test_hit_rate(self, memory_cache):
        await memory_cache.set("A", "a", ttl=600)
        await memory_cache.get("A")
        await memory_cache.get("missing")

        stats = memory_cache.get_stats()

        assert stats["backend"] == "memory"
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate_percent"] == 50.0
        assert stats["size"] == 1

    def test_clear(self, memory_cache):
        memory_cache.clear()
        assert memory_cache.get_stats()["size"] == 0
