"""
Pytest configuration and shared fixtures.
"""
import pytest

from keys.application.services.key_service import KeyService
from licenses.application.services.license_service import build_license_service
from skus.application.services.sku_catalog import SkuCatalog

from fakes import (
    InMemoryKeyPairRepository,
    InMemoryLicenseRecordRepository,
    InMemorySkuRepository,
)


@pytest.fixture
def key_repository():
    """Fixture for an in-memory KeyPairRepository."""
    return InMemoryKeyPairRepository()


@pytest.fixture
def sku_repository():
    """Fixture for an in-memory SkuRepository."""
    return InMemorySkuRepository()


@pytest.fixture
def license_repository():
    """Fixture for an in-memory LicenseRecordRepository with one named customer."""
    return InMemoryLicenseRecordRepository(customers={"cust-1": "Acme Corp"})


@pytest.fixture
def key_service(key_repository):
    """Fixture for KeyService."""
    return KeyService(key_repository)


@pytest.fixture
def sku_catalog(sku_repository):
    """Fixture for SkuCatalog."""
    return SkuCatalog(sku_repository)


@pytest.fixture
def license_service(license_repository, key_service, sku_catalog):
    """Fixture for a LicenseService without issuer/audience checks."""
    return build_license_service(license_repository, key_service, sku_catalog)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def clear_cache():
    """Empty the Django cache so cached roles do not leak between tests."""
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_auth_key(db, clear_cache):
    """Factory storing an InternalAuthKey row and returning its raw key."""
    from access.domain.internal_auth_key import InternalAuthKey
    from access.infrastructure.models import InternalAuthKey as InternalAuthKeyModel

    def make(role):
        entity, raw_key = InternalAuthKey.create(role=role, created_by="tests")
        InternalAuthKeyModel.objects.create(
            id=entity.id,
            key_hash=entity.key_hash,
            role=entity.role.value,
            created_by=entity.created_by,
        )
        return raw_key

    return make


@pytest.fixture
def general_client(api_client, make_auth_key):
    """API client authenticated with a general role key."""
    from core.domain.value_objects import Role

    api_client.credentials(HTTP_X_API_KEY=make_auth_key(Role.GENERAL))
    return api_client


@pytest.fixture
def admin_client(make_auth_key):
    """API client authenticated with an admin role key."""
    from rest_framework.test import APIClient

    from core.domain.value_objects import Role

    client = APIClient()
    client.credentials(HTTP_X_API_KEY=make_auth_key(Role.ADMIN))
    return client
