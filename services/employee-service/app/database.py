"""
Database connection management for Employee Service.
"""

from typing import Optional

import asyncpg
import structlog

from .config import settings

logger = structlog.get_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS departments (
    id SERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL
);

CREATE TABLE IF NOT EXISTS employees (
    id SERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    email VARCHAR(255) NOT NULL,
    phone VARCHAR(50) NOT NULL,
    salary NUMERIC(12, 2) NOT NULL DEFAULT 0,
    department_id INTEGER NOT NULL DEFAULT 0,
    status VARCHAR(50) NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""


class DatabaseManager:
    """Manages the PostgreSQL connection pool."""

    def __init__(self):
        self.pool: Optional[asyncpg.Pool] = None

    async def connect(self) -> asyncpg.Pool:
        """Create database connection pool."""
        if not self.pool:
            logger.info("Creating database connection pool")
            self.pool = await asyncpg.create_pool(
                settings.DATABASE_URL,
                min_size=settings.DATABASE_POOL_MIN_SIZE,
                max_size=settings.DATABASE_POOL_SIZE,
                command_timeout=settings.DATABASE_COMMAND_TIMEOUT,
                statement_cache_size=0,  # Required for pgbouncer transaction pooling
            )
            logger.info("Database connection pool created")
        return self.pool

    async def disconnect(self) -> None:
        """Close database connection pool."""
        if self.pool:
            logger.info("Closing database connection pool")
            await self.pool.close()
            self.pool = None
            logger.info("Database connection pool closed")

    async def init_schema(self) -> None:
        """Create the departments and employees tables if missing."""
        pool = await self.connect()
        async with pool.acquire() as conn:
            await conn.execute(SCHEMA_SQL)
        logger.info("Database schema ensured")


db_manager = DatabaseManager()
