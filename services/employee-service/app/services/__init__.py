"""
Business logic service layer.
"""

from .cache_aside import CacheAsideCoordinator

__all__ = ["CacheAsideCoordinator"]
