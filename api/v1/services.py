"""
Service wiring for the v1 API.

Builds application services on top of the Django adapters. Settings
are read at call time so tests can override them.
"""
from django.conf import settings

from access.application.services.role_resolver import ApiKeyRoleResolver
from access.infrastructure.repositories.django_internal_auth_key_repository import (
    DjangoInternalAuthKeyRepository,
)
from core.infrastructure.cache_adapters import cache_adapter
from keys.application.services.key_service import KeyService
from keys.infrastructure.repositories.django_key_pair_repository import DjangoKeyPairRepository
from licenses.application.services.license_service import LicenseService, build_license_service
from licenses.infrastructure.repositories.django_license_record_repository import (
    DjangoLicenseRecordRepository,
)
from skus.application.services.sku_catalog import SkuCatalog
from skus.infrastructure.repositories.django_sku_repository import DjangoSkuRepository

_key_repo = DjangoKeyPairRepository()
_sku_repo = DjangoSkuRepository()
_license_repo = DjangoLicenseRecordRepository()
_auth_key_repo = DjangoInternalAuthKeyRepository()


def key_service() -> KeyService:
    return KeyService(_key_repo)


def sku_catalog() -> SkuCatalog:
    return SkuCatalog(_sku_repo)


def license_service() -> LicenseService:
    return build_license_service(
        _license_repo,
        key_service=key_service(),
        sku_catalog=sku_catalog(),
        expected_issuer=getattr(settings, "LICENSE_TOKEN_EXPECTED_ISSUER", None),
        expected_audience=getattr(settings, "LICENSE_TOKEN_EXPECTED_AUDIENCE", None),
    )


def role_resolver() -> ApiKeyRoleResolver:
    return ApiKeyRoleResolver(
        _auth_key_repo,
        cache_adapter,
        timeout=getattr(settings, "AUTH_ROLE_CACHE_TIMEOUT", 300),
    )
