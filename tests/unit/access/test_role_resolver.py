"""
Unit tests for API key role resolution.
"""

import pytest

from access.application.services.role_resolver import ApiKeyRoleResolver
from access.domain.internal_auth_key import InternalAuthKey, hash_key
from core.domain.value_objects import Role
from fakes import DictCache, InMemoryAuthKeyRepository


@pytest.fixture
def issued_key():
    """An admin auth key and its raw value."""
    return InternalAuthKey.create(role=Role.ADMIN, created_by="ops")


@pytest.fixture
def repository(issued_key):
    entity, _ = issued_key
    return InMemoryAuthKeyRepository([entity])


@pytest.fixture
def cache():
    return DictCache()


@pytest.fixture
def resolver(repository, cache):
    return ApiKeyRoleResolver(repository, cache, timeout=60)


class TestInternalAuthKey:
    """Tests for InternalAuthKey."""

    def test_only_hash_is_kept(self, issued_key):
        """Test the entity stores the digest of the raw key."""
        entity, raw_key = issued_key

        assert entity.key_hash == hash_key(raw_key)
        assert raw_key not in entity.key_hash
        assert len(entity.key_hash) == 64


class TestApiKeyRoleResolver:
    """Tests for ApiKeyRoleResolver."""

    @pytest.mark.asyncio
    async def test_known_key_resolves_and_is_cached(self, resolver, repository, cache, issued_key):
        """Test a valid key resolves to its role and is served from cache after."""
        _, raw_key = issued_key

        assert await resolver.resolve(raw_key) is Role.ADMIN
        assert await resolver.resolve(raw_key) is Role.ADMIN

        assert repository.lookups == 1
        assert list(cache.values.values()) == ["admin"]
        assert list(cache.timeouts.values()) == [60]

    @pytest.mark.asyncio
    async def test_unknown_key_is_never_cached(self, resolver, repository, cache):
        """Test failed lookups leave the cache untouched."""
        assert await resolver.resolve("random-key") is Role.NONE
        assert await resolver.resolve("random-key") is Role.NONE

        assert repository.lookups == 2
        assert cache.values == {}

    @pytest.mark.asyncio
    async def test_storage_failure_is_unauthenticated(self, resolver, repository, cache, issued_key):
        """Test a storage fault resolves to NONE and is not cached."""
        _, raw_key = issued_key
        repository.fail_reads = True

        assert await resolver.resolve(raw_key) is Role.NONE
        assert cache.values == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_key", ["", "   ", None])
    async def test_blank_key(self, resolver, repository, raw_key):
        """Test blank keys never reach storage."""
        assert await resolver.resolve(raw_key) is Role.NONE
        assert repository.lookups == 0
