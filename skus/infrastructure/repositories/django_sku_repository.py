"""
Django implementation of SkuRepository port.
"""
from typing import Iterable, List, Optional

from asgiref.sync import sync_to_async

from core.domain.entity import with_timestamps
from core.domain.pagination import PageRequest
from core.infrastructure.database import translate_storage_errors
from skus.domain.sku import Sku
from skus.infrastructure.models import Sku as SkuModel
from skus.ports.sku_repository import SkuRepository


class DjangoSkuRepository(SkuRepository):
    """Django ORM implementation of SkuRepository."""

    def _to_domain(self, model: SkuModel) -> Sku:
        """Convert Django model to domain entity."""
        sku = Sku(code=model.code, name=model.name, description=model.description)
        return with_timestamps(sku, model.created_at, model.updated_at)

    @sync_to_async
    def add(self, sku: Sku) -> Sku:
        with translate_storage_errors("adding sku"):
            model = SkuModel.objects.create(
                code=sku.code,
                name=sku.name,
                description=sku.description,
            )
        return self._to_domain(model)

    @sync_to_async
    def update(self, sku: Sku) -> Optional[Sku]:
        with translate_storage_errors("updating sku"):
            try:
                model = SkuModel.objects.get(code=sku.code)
            except SkuModel.DoesNotExist:
                return None
            model.name = sku.name
            model.description = sku.description
            model.save(update_fields=["name", "description", "updated_at"])
        return self._to_domain(model)

    @sync_to_async
    def delete(self, code: str) -> Optional[Sku]:
        with translate_storage_errors("deleting sku"):
            try:
                model = SkuModel.objects.get(code=code)
            except SkuModel.DoesNotExist:
                return None
            deleted = self._to_domain(model)
            model.delete()
        return deleted

    @sync_to_async
    def find_by_code(self, code: str) -> Optional[Sku]:
        with translate_storage_errors("reading sku"):
            model = SkuModel.objects.filter(code=code).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_name(self, name: str) -> Optional[Sku]:
        with translate_storage_errors("reading sku"):
            model = SkuModel.objects.filter(name=name).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_codes(self, codes: Iterable[str]) -> List[Sku]:
        with translate_storage_errors("reading skus"):
            models = list(SkuModel.objects.filter(code__in=list(codes)).order_by("code"))
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def list(self, page: PageRequest) -> List[Sku]:
        with translate_storage_errors("listing skus"):
            models = list(SkuModel.objects.order_by("code")[page.offset : page.offset + page.limit])
        return [self._to_domain(model) for model in models]
