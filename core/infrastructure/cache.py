"""
Cache port.

Services that cache lookups depend on this interface rather than on
Django's cache framework.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional


class CachePort(ABC):
    """Async key/value cache with per-entry expiry."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Returns:
            Cached value or None if absent or expired
        """

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Store a value.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Lifetime in seconds (None for the backend default)
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Drop a cached value."""
