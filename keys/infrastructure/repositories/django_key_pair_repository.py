"""
Django implementation of KeyPairRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from typing import List, Optional

from asgiref.sync import sync_to_async

from core.domain.entity import with_timestamps
from core.domain.pagination import PageRequest
from core.infrastructure.database import translate_storage_errors
from keys.domain.key_pair import KeyPair
from keys.infrastructure.models import KeyPair as KeyPairModel
from keys.ports.key_pair_repository import KeyPairRepository


class DjangoKeyPairRepository(KeyPairRepository):
    """
    Django ORM implementation of KeyPairRepository.

    Timestamps are assigned by the model (auto_now_add/auto_now)
    and copied onto the returned entities.
    """

    def _to_domain(self, model: KeyPairModel) -> KeyPair:
        """
        Convert Django model to domain entity.

        Args:
            model: Django KeyPair model

        Returns:
            KeyPair domain entity
        """
        key_pair = KeyPair(
            id=model.id,
            label=model.label,
            created_by=model.created_by,
            updated_by=model.updated_by,
            private_key=model.private_key,
            public_key=model.public_key,
            description=model.description,
        )
        return with_timestamps(key_pair, model.created_at, model.updated_at)

    @sync_to_async
    def add(self, key_pair: KeyPair) -> KeyPair:
        """
        Insert a new key pair.

        Args:
            key_pair: KeyPair entity to insert

        Returns:
            Stored key pair
        """
        with translate_storage_errors("adding key pair"):
            model = KeyPairModel.objects.create(
                id=key_pair.id,
                label=key_pair.label,
                created_by=key_pair.created_by,
                updated_by=key_pair.updated_by,
                private_key=key_pair.private_key,
                public_key=key_pair.public_key,
                description=key_pair.description,
            )
        return self._to_domain(model)

    @sync_to_async
    def update_metadata(self, key_pair: KeyPair) -> Optional[KeyPair]:
        """
        Update label, description and updated_by.

        Args:
            key_pair: KeyPair carrying the new metadata

        Returns:
            Stored key pair or None if not found
        """
        with translate_storage_errors("updating key pair"):
            try:
                model = KeyPairModel.objects.get(id=key_pair.id)
            except KeyPairModel.DoesNotExist:
                return None
            model.label = key_pair.label
            model.description = key_pair.description
            model.updated_by = key_pair.updated_by
            model.save(update_fields=["label", "description", "updated_by", "updated_at"])
        return self._to_domain(model)

    @sync_to_async
    def delete(self, key_id: str) -> Optional[KeyPair]:
        """
        Delete a key pair permanently.

        Args:
            key_id: Key pair identifier

        Returns:
            The deleted key pair or None if not found
        """
        with translate_storage_errors("deleting key pair"):
            try:
                model = KeyPairModel.objects.get(id=key_id)
            except KeyPairModel.DoesNotExist:
                return None
            deleted = self._to_domain(model)
            model.delete()
        return deleted

    @sync_to_async
    def find_by_id(self, key_id: str) -> Optional[KeyPair]:
        """
        Find a key pair by ID.

        Args:
            key_id: Key pair identifier

        Returns:
            KeyPair entity or None if not found
        """
        with translate_storage_errors("reading key pair"):
            try:
                model = KeyPairModel.objects.get(id=key_id)
            except KeyPairModel.DoesNotExist:
                return None
        return self._to_domain(model)

    @sync_to_async
    def list(self, page: PageRequest) -> List[KeyPair]:
        """
        List key pairs ordered by creation time ascending.

        Args:
            page: Offset/limit window

        Returns:
            List of KeyPair entities
        """
        with translate_storage_errors("listing key pairs"):
            models = list(
                KeyPairModel.objects.order_by("created_at", "id")[page.offset : page.offset + page.limit]
            )
        return [self._to_domain(model) for model in models]
