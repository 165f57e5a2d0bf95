"""
Django implementation of InternalAuthKeyRepository port.
"""
from typing import Optional

from asgiref.sync import sync_to_async

from access.domain.internal_auth_key import InternalAuthKey
from access.infrastructure.models import InternalAuthKey as InternalAuthKeyModel
from access.ports.internal_auth_key_repository import InternalAuthKeyRepository
from core.domain.entity import with_timestamps
from core.domain.value_objects import Role
from core.infrastructure.database import translate_storage_errors


class DjangoInternalAuthKeyRepository(InternalAuthKeyRepository):
    """Django ORM implementation of InternalAuthKeyRepository."""

    def _to_domain(self, model: InternalAuthKeyModel) -> InternalAuthKey:
        auth_key = InternalAuthKey(
            id=model.id,
            key_hash=model.key_hash,
            role=Role.parse(model.role),
            created_by=model.created_by,
            description=model.description,
        )
        return with_timestamps(auth_key, model.created_at, model.updated_at)

    @sync_to_async
    def add(self, auth_key: InternalAuthKey) -> InternalAuthKey:
        with translate_storage_errors("adding auth key"):
            model = InternalAuthKeyModel.objects.create(
                id=auth_key.id,
                key_hash=auth_key.key_hash,
                role=auth_key.role.value,
                created_by=auth_key.created_by,
                description=auth_key.description,
            )
        return self._to_domain(model)

    @sync_to_async
    def find_by_hash(self, key_hash: str) -> Optional[InternalAuthKey]:
        with translate_storage_errors("reading auth key"):
            model = InternalAuthKeyModel.objects.filter(key_hash=key_hash).first()
        return self._to_domain(model) if model else None
