"""
Repository layer - durable storage for departments and employees.
"""

from .entity_repository import IEntityRepository
from .postgres_repository import PostgresEntityRepository

__all__ = ["IEntityRepository", "PostgresEntityRepository"]
