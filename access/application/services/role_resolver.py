"""
API key role resolver.

Maps a raw API key to the role of its InternalAuthKey. Successful
lookups are cached; failed lookups never are, so a flood of random
keys cannot grow the cache.
"""
import logging
from typing import Optional

from access.domain.internal_auth_key import hash_key
from access.ports.internal_auth_key_repository import InternalAuthKeyRepository
from core.domain.exceptions import DomainException
from core.domain.value_objects import Role
from core.infrastructure.cache import CachePort
from core.metrics import cache_hits_total, cache_misses_total

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300


class ApiKeyRoleResolver:
    """Resolve raw API keys to roles."""

    def __init__(
        self,
        repository: InternalAuthKeyRepository,
        cache: CachePort,
        timeout: Optional[int] = DEFAULT_TIMEOUT,
    ):
        """Initialize resolver with repository and cache."""
        self.repository = repository
        self.cache = cache
        self.timeout = timeout

    @staticmethod
    def _cache_key(key_hash: str) -> str:
        return f"auth:role:{key_hash[:32]}"

    async def resolve(self, raw_key: str) -> Role:
        """
        Resolve an API key.

        Args:
            raw_key: Value of the X-API-Key header

        Returns:
            Role of the key, or Role.NONE when unknown or unusable
        """
        if not raw_key or not raw_key.strip():
            return Role.NONE

        key_hash = hash_key(raw_key.strip())
        cache_key = self._cache_key(key_hash)

        cached = await self.cache.get(cache_key)
        if cached:
            cache_hits_total.labels(cache_key="auth_role").inc()
            return Role.parse(cached)
        cache_misses_total.labels(cache_key="auth_role").inc()

        try:
            auth_key = await self.repository.find_by_hash(key_hash)
        except DomainException as exc:
            logger.error("Auth key lookup failed: %s", exc.message)
            return Role.NONE

        if auth_key is None or auth_key.role is Role.NONE:
            return Role.NONE

        await self.cache.set(cache_key, auth_key.role.value, timeout=self.timeout)
        return auth_key.role
