"""
Shared dependencies for the application.

Provides dependency injection functions used by the route handlers.
"""

from typing import Optional

from .services.cache_aside import CacheAsideCoordinator

# Global coordinator instance (set by main app)
_coordinator: Optional[CacheAsideCoordinator] = None


def set_coordinator(coordinator: Optional[CacheAsideCoordinator]) -> None:
    """
    Set the global coordinator instance.

    Called by main app during startup and cleared on shutdown.
    """
    global _coordinator
    _coordinator = coordinator


async def get_coordinator() -> CacheAsideCoordinator:
    """Get coordinator instance for dependency injection."""
    if _coordinator is None:
        raise RuntimeError("Coordinator not initialized")
    return _coordinator
