"""
Integration test fixtures and configuration.

These tests run against a deployed employee-service with its PostgreSQL
and Redis. They are skipped unless ``EMPLOYEE_SERVICE_URL`` is set.
"""

import os

import pytest
import redis.asyncio as redis

EMPLOYEE_SERVICE_URL = os.getenv("EMPLOYEE_SERVICE_URL")
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
CACHE_KEY_PREFIX = os.getenv("CACHE_KEY_PREFIX", "")

TEST_TIMEOUT = 10.0  # seconds


def pytest_collection_modifyitems(config, items):
    """Skip integration tests when no deployment is configured."""
    if EMPLOYEE_SERVICE_URL:
        return
    skip = pytest.mark.skip(reason="EMPLOYEE_SERVICE_URL not set")
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(skip)


@pytest.fixture
def service_url() -> str:
    return (EMPLOYEE_SERVICE_URL or "").rstrip("/")


@pytest.fixture
def redis_client():
    """Direct Redis client for inspecting cache keys."""
    return redis.from_url(REDIS_URL, decode_responses=True)


@pytest.fixture
def cache_key():
    """Apply the deployment's key prefix."""

    def build(key: str) -> str:
        return f"{CACHE_KEY_PREFIX}{key}"

    return build
