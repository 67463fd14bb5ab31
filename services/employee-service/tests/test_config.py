"""
Tests for service configuration.
"""

import pytest
from pydantic import ValidationError

from app.config import Settings


class TestSettings:
    """Test settings defaults and overrides."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CACHE_TTL_SECONDS", raising=False)
        settings = Settings(_env_file=None)

        assert settings.SERVICE_NAME == "employee-service"
        assert settings.CACHE_TTL_SECONDS == 600
        assert settings.CACHE_KEY_PREFIX == ""
        assert settings.CACHE_BACKEND == "redis"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("CACHE_TTL_SECONDS", "30")
        monkeypatch.setenv("CACHE_BACKEND", "memory")

        settings = Settings(_env_file=None)

        assert settings.CACHE_TTL_SECONDS == 30
        assert settings.CACHE_BACKEND == "memory"

    def test_rejects_unknown_backend(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, CACHE_BACKEND="memcached")

    def test_rejects_zero_ttl(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, CACHE_TTL_SECONDS=0)

    def test_redis_url_safe_strips_credentials(self):
        settings = Settings(_env_file=None, REDIS_URL="redis://:secret@cache:6379/0")

        assert settings.redis_url_safe == "cache:6379/0"
