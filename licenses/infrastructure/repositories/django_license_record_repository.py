"""
Django implementation of LicenseRecordRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db.models import OuterRef, QuerySet, Subquery

from core.domain.entity import with_timestamps
from core.domain.pagination import PageRequest
from core.infrastructure.database import translate_storage_errors
from customers.infrastructure.models import Customer
from licenses.domain.license_record import LicenseCustomer, LicenseDetails, LicenseRecord
from licenses.infrastructure.models import LicenseRecord as LicenseRecordModel
from licenses.ports.license_record_repository import LicenseRecordRepository


class DjangoLicenseRecordRepository(LicenseRecordRepository):
    """
    Django ORM implementation of LicenseRecordRepository.

    The customer join is a correlated subquery on customer_id, which
    behaves as a left outer join since there is no foreign key.
    """

    def _to_domain(self, model: LicenseRecordModel) -> LicenseRecord:
        """
        Convert Django model to domain entity.

        Args:
            model: Django LicenseRecord model

        Returns:
            LicenseRecord domain entity
        """
        record = LicenseRecord(
            id=model.id,
            label=model.label,
            issued_by=model.issued_by,
            customer_id=model.customer_id,
            token=model.token,
            key_id=model.key_id,
            description=model.description,
        )
        return with_timestamps(record, model.created_at, model.updated_at)

    def _to_details(self, model: LicenseRecordModel) -> LicenseDetails:
        return LicenseDetails(
            record=self._to_domain(model),
            customer=LicenseCustomer(id=model.customer_id, name=model.customer_name),
        )

    def _with_customer(self) -> QuerySet:
        customer_name = Customer.objects.filter(id=OuterRef("customer_id")).values("name")[:1]
        return LicenseRecordModel.objects.annotate(customer_name=Subquery(customer_name))

    @sync_to_async
    def add(self, record: LicenseRecord) -> LicenseRecord:
        with translate_storage_errors("adding license"):
            model = LicenseRecordModel.objects.create(
                id=record.id,
                label=record.label,
                issued_by=record.issued_by,
                customer_id=record.customer_id,
                token=record.token,
                key_id=record.key_id,
                description=record.description,
            )
        return self._to_domain(model)

    @sync_to_async
    def update(self, record: LicenseRecord) -> Optional[LicenseRecord]:
        with translate_storage_errors("updating license"):
            try:
                model = LicenseRecordModel.objects.get(id=record.id)
            except LicenseRecordModel.DoesNotExist:
                return None
            model.label = record.label
            model.description = record.description
            model.save(update_fields=["label", "description", "updated_at"])
        return self._to_domain(model)

    @sync_to_async
    def delete(self, license_id: str) -> Optional[LicenseRecord]:
        with translate_storage_errors("deleting license"):
            try:
                model = LicenseRecordModel.objects.get(id=license_id)
            except LicenseRecordModel.DoesNotExist:
                return None
            deleted = self._to_domain(model)
            model.delete()
        return deleted

    @sync_to_async
    def find_by_id(self, license_id: str) -> Optional[LicenseRecord]:
        with translate_storage_errors("reading license"):
            model = LicenseRecordModel.objects.filter(id=license_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_details_by_id(self, license_id: str) -> Optional[LicenseDetails]:
        with translate_storage_errors("reading license"):
            model = self._with_customer().filter(id=license_id).first()
        return self._to_details(model) if model else None

    @sync_to_async
    def list_details(
        self, page: PageRequest, customer_id: Optional[str] = None
    ) -> List[LicenseDetails]:
        with translate_storage_errors("listing licenses"):
            queryset = self._with_customer()
            if customer_id is not None:
                queryset = queryset.filter(customer_id=customer_id)
            models = list(queryset.order_by("created_at", "id")[page.offset : page.offset + page.limit])
        return [self._to_details(model) for model in models]
