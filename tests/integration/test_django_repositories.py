"""
Integration tests for the Django repository implementations.
"""

from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from access.domain.internal_auth_key import InternalAuthKey
from access.infrastructure.repositories.django_internal_auth_key_repository import (
    DjangoInternalAuthKeyRepository,
)
from core.domain.exceptions import ConflictError
from core.domain.pagination import PageRequest
from core.domain.value_objects import Role
from customers.infrastructure.models import Customer
from keys.domain.key_pair import KeyPair
from keys.infrastructure.models import KeyPair as KeyPairModel
from keys.infrastructure.repositories.django_key_pair_repository import DjangoKeyPairRepository
from licenses.domain.license_record import LicenseRecord
from licenses.infrastructure.models import LicenseRecord as LicenseRecordModel
from licenses.infrastructure.repositories.django_license_record_repository import (
    DjangoLicenseRecordRepository,
)
from skus.domain.sku import Sku
from skus.infrastructure.repositories.django_sku_repository import DjangoSkuRepository


@pytest.fixture(scope="module")
def key_pair():
    return KeyPair.generate(label="signing", created_by="alice", updated_by="alice")


def _record(license_id, customer_id="cust-1", key_id="key-1"):
    return LicenseRecord(
        id=license_id,
        label=f"license {license_id}",
        issued_by="alice",
        customer_id=customer_id,
        token=f"header.{license_id}.signature",
        key_id=key_id,
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestKeyPairRepository:
    """Integration tests for DjangoKeyPairRepository."""

    def test_add_and_find(self, key_pair):
        """Test storing a key pair stamps timestamps and reads back."""
        repository = DjangoKeyPairRepository()

        saved = async_to_sync(repository.add)(key_pair)
        found = async_to_sync(repository.find_by_id)(key_pair.id)

        assert saved.created_at is not None
        assert found.private_key == key_pair.private_key
        assert found.public_key == key_pair.public_key

    def test_duplicate_id_conflicts(self, key_pair):
        """Test inserting the same id twice is a conflict."""
        repository = DjangoKeyPairRepository()
        async_to_sync(repository.add)(key_pair)

        with pytest.raises(ConflictError):
            async_to_sync(repository.add)(key_pair)

    def test_update_metadata_leaves_material(self, key_pair):
        """Test metadata updates do not touch key material."""
        repository = DjangoKeyPairRepository()
        async_to_sync(repository.add)(key_pair)

        updated = async_to_sync(repository.update_metadata)(
            key_pair.with_metadata(label="renamed", description="d", updated_by="bob")
        )

        assert updated.label == "renamed"
        assert KeyPairModel.objects.get(id=key_pair.id).private_key == key_pair.private_key

    def test_missing_rows(self):
        """Test reads and writes of unknown ids return None."""
        repository = DjangoKeyPairRepository()

        assert async_to_sync(repository.find_by_id)("missing") is None
        assert async_to_sync(repository.delete)("missing") is None

    def test_list_oldest_first(self, key_pair):
        """Test listing orders by creation time."""
        repository = DjangoKeyPairRepository()
        async_to_sync(repository.add)(key_pair)
        newer = KeyPair(
            id="aaa-newer",
            label="newer",
            created_by="alice",
            updated_by="alice",
            private_key=key_pair.private_key,
            public_key=key_pair.public_key,
        )
        async_to_sync(repository.add)(newer)
        KeyPairModel.objects.filter(id=newer.id).update(created_at=timezone.now() + timedelta(hours=1))

        listed = async_to_sync(repository.list)(PageRequest())

        assert [k.id for k in listed] == [key_pair.id, newer.id]


@pytest.mark.django_db
@pytest.mark.integration
class TestSkuRepository:
    """Integration tests for DjangoSkuRepository."""

    def test_find_by_codes_skips_unknown(self):
        """Test only existing codes come back."""
        repository = DjangoSkuRepository()
        for code in ("B", "A"):
            async_to_sync(repository.add)(Sku(code=code, name=f"Sku {code}"))

        found = async_to_sync(repository.find_by_codes)(["A", "B", "Z"])

        assert [sku.code for sku in found] == ["A", "B"]

    def test_unique_name(self):
        """Test two skus cannot share a name."""
        repository = DjangoSkuRepository()
        async_to_sync(repository.add)(Sku(code="A", name="Shared"))

        with pytest.raises(ConflictError):
            async_to_sync(repository.add)(Sku(code="B", name="Shared"))

    def test_update_and_find_by_name(self):
        """Test renaming a sku."""
        repository = DjangoSkuRepository()
        async_to_sync(repository.add)(Sku(code="A", name="Old"))

        async_to_sync(repository.update)(Sku(code="A", name="New", description="d"))

        assert async_to_sync(repository.find_by_name)("New").code == "A"
        assert async_to_sync(repository.find_by_name)("Old") is None


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseRecordRepository:
    """Integration tests for DjangoLicenseRecordRepository."""

    def test_details_join_customer(self):
        """Test details carry the customer's name when the customer exists."""
        Customer.objects.create(id="cust-1", name="Acme Corp")
        repository = DjangoLicenseRecordRepository()
        async_to_sync(repository.add)(_record("lic-1"))
        async_to_sync(repository.add)(_record("lic-2", customer_id="cust-404"))

        known = async_to_sync(repository.find_details_by_id)("lic-1")
        orphan = async_to_sync(repository.find_details_by_id)("lic-2")

        assert known.customer.name == "Acme Corp"
        assert orphan.customer.id == "cust-404"
        assert orphan.customer.name is None

    def test_list_filters_by_customer(self):
        """Test listing by customer and pagination."""
        repository = DjangoLicenseRecordRepository()
        for index, customer in enumerate(["cust-1", "cust-2", "cust-1"]):
            async_to_sync(repository.add)(_record(f"lic-{index}", customer_id=customer))
            LicenseRecordModel.objects.filter(id=f"lic-{index}").update(
                created_at=timezone.now() + timedelta(minutes=index)
            )

        everything = async_to_sync(repository.list_details)(PageRequest())
        second_page = async_to_sync(repository.list_details)(PageRequest(offset=1, limit=1))
        mine = async_to_sync(repository.list_details)(PageRequest(), customer_id="cust-1")

        assert [d.id for d in everything] == ["lic-0", "lic-1", "lic-2"]
        assert [d.id for d in second_page] == ["lic-1"]
        assert [d.id for d in mine] == ["lic-0", "lic-2"]

    def test_update_and_delete(self):
        """Test metadata update keeps the token and delete removes the row."""
        repository = DjangoLicenseRecordRepository()
        original = async_to_sync(repository.add)(_record("lic-1"))

        updated = async_to_sync(repository.update)(original.with_metadata(label="renamed", description="x"))
        deleted = async_to_sync(repository.delete)("lic-1")

        assert updated.label == "renamed"
        assert updated.token == original.token
        assert deleted.id == "lic-1"
        assert async_to_sync(repository.find_by_id)("lic-1") is None


@pytest.mark.django_db
@pytest.mark.integration
class TestInternalAuthKeyRepository:
    """Integration tests for DjangoInternalAuthKeyRepository."""

    def test_find_by_hash(self):
        """Test keys are found by digest only."""
        repository = DjangoInternalAuthKeyRepository()
        entity, raw_key = InternalAuthKey.create(role=Role.LICENSE_ADMIN, created_by="ops")
        async_to_sync(repository.add)(entity)

        found = async_to_sync(repository.find_by_hash)(entity.key_hash)

        assert found.role is Role.LICENSE_ADMIN
        assert async_to_sync(repository.find_by_hash)(raw_key) is None
