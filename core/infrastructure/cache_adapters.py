"""
Django cache implementation of CachePort.

A cache outage degrades to a miss: lookups fall through to storage
and writes are dropped.
"""

import logging
from typing import Any, Optional

from asgiref.sync import sync_to_async
from django.core.cache import cache

from core.infrastructure.cache import CachePort

logger = logging.getLogger(__name__)


class DjangoCacheAdapter(CachePort):
    """CachePort backed by the default Django cache (Redis in production)."""

    async def get(self, key: str) -> Optional[Any]:
        try:
            value = await sync_to_async(cache.get)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Cache read failed for %s: %s", key, e, exc_info=True)
            return None
        logger.debug("Cache %s: %s", "hit" if value is not None else "miss", key)
        return value

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        try:
            await sync_to_async(cache.set)(key, value, timeout=timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Cache write failed for %s: %s", key, e, exc_info=True)

    async def delete(self, key: str) -> None:
        try:
            await sync_to_async(cache.delete)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Cache delete failed for %s: %s", key, e, exc_info=True)


cache_adapter = DjangoCacheAdapter()
