"""
In-memory adapters for unit tests.

They mirror the Django repositories: uniqueness violations raise
ConflictError and rows come back stamped with storage timestamps.
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from access.ports.internal_auth_key_repository import InternalAuthKeyRepository
from core.domain.entity import with_timestamps
from core.domain.exceptions import ConflictError, StorageError
from core.domain.pagination import PageRequest
from core.infrastructure.cache import CachePort
from keys.ports.key_pair_repository import KeyPairRepository
from licenses.domain.license_record import LicenseCustomer, LicenseDetails
from licenses.ports.license_record_repository import LicenseRecordRepository
from skus.ports.sku_repository import SkuRepository

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class _Clock:
    """Strictly increasing timestamps so insertion order is creation order."""

    def __init__(self):
        self.ticks = 0

    def now(self) -> datetime:
        self.ticks += 1
        return EPOCH + timedelta(seconds=self.ticks)


def _window(rows: List, page: PageRequest, key=lambda row: (row.created_at, row.id)) -> List:
    ordered = sorted(rows, key=key)
    return ordered[page.offset : page.offset + page.limit]


class InMemoryKeyPairRepository(KeyPairRepository):
    def __init__(self):
        self.rows: Dict[str, object] = {}
        self.clock = _Clock()
        self.fail_reads = False

    async def add(self, key_pair):
        if key_pair.id in self.rows:
            raise ConflictError(f"Key {key_pair.id} already exists")
        now = self.clock.now()
        stored = with_timestamps(key_pair, now, now)
        self.rows[key_pair.id] = stored
        return stored

    async def update_metadata(self, key_pair):
        existing = self.rows.get(key_pair.id)
        if existing is None:
            return None
        updated = with_timestamps(
            existing.with_metadata(key_pair.label, key_pair.description, key_pair.updated_by),
            existing.created_at,
            self.clock.now(),
        )
        self.rows[key_pair.id] = updated
        return updated

    async def delete(self, key_id):
        return self.rows.pop(key_id, None)

    async def find_by_id(self, key_id):
        if self.fail_reads:
            raise StorageError("Storage error while reading key pair")
        return self.rows.get(key_id)

    async def list(self, page):
        return _window(list(self.rows.values()), page)


class InMemorySkuRepository(SkuRepository):
    def __init__(self):
        self.rows: Dict[str, object] = {}
        self.clock = _Clock()

    def _name_taken(self, name: str, code: str) -> bool:
        return any(sku.name == name and sku.code != code for sku in self.rows.values())

    async def add(self, sku):
        if sku.code in self.rows or self._name_taken(sku.name, sku.code):
            raise ConflictError(f"Sku {sku.code} already exists")
        now = self.clock.now()
        stored = with_timestamps(sku, now, now)
        self.rows[sku.code] = stored
        return stored

    async def update(self, sku):
        existing = self.rows.get(sku.code)
        if existing is None:
            return None
        if self._name_taken(sku.name, sku.code):
            raise ConflictError(f"Sku named {sku.name} already exists")
        updated = with_timestamps(sku, existing.created_at, self.clock.now())
        self.rows[sku.code] = updated
        return updated

    async def delete(self, code):
        return self.rows.pop(code, None)

    async def find_by_code(self, code):
        return self.rows.get(code)

    async def find_by_name(self, name):
        return next((sku for sku in self.rows.values() if sku.name == name), None)

    async def find_by_codes(self, codes: Iterable[str]):
        wanted = set(codes)
        return [sku for code, sku in self.rows.items() if code in wanted]

    async def list(self, page):
        return _window(list(self.rows.values()), page, key=lambda sku: sku.code)


class InMemoryLicenseRecordRepository(LicenseRecordRepository):
    def __init__(self, customers: Optional[Dict[str, str]] = None):
        self.rows: Dict[str, object] = {}
        self.customers = customers or {}
        self.clock = _Clock()

    def _details(self, record) -> LicenseDetails:
        return LicenseDetails(
            record=record,
            customer=LicenseCustomer(id=record.customer_id, name=self.customers.get(record.customer_id)),
        )

    async def add(self, record):
        if record.id in self.rows:
            raise ConflictError(f"License {record.id} already exists")
        now = self.clock.now()
        stored = with_timestamps(record, now, now)
        self.rows[record.id] = stored
        return stored

    async def update(self, record):
        existing = self.rows.get(record.id)
        if existing is None:
            return None
        updated = with_timestamps(
            existing.with_metadata(label=record.label, description=record.description),
            existing.created_at,
            self.clock.now(),
        )
        self.rows[record.id] = updated
        return updated

    async def delete(self, license_id):
        return self.rows.pop(license_id, None)

    async def find_by_id(self, license_id):
        return self.rows.get(license_id)

    async def find_details_by_id(self, license_id):
        record = self.rows.get(license_id)
        return self._details(record) if record else None

    async def list_details(self, page, customer_id=None):
        rows = [r for r in self.rows.values() if customer_id is None or r.customer_id == customer_id]
        return [self._details(record) for record in _window(rows, page)]


class InMemoryAuthKeyRepository(InternalAuthKeyRepository):
    def __init__(self, keys=None):
        self.keys = {key.key_hash: key for key in keys or []}
        self.lookups = 0
        self.fail_reads = False

    async def add(self, auth_key):
        self.keys[auth_key.key_hash] = auth_key
        return auth_key

    async def find_by_hash(self, key_hash):
        self.lookups += 1
        if self.fail_reads:
            raise StorageError("Storage error while reading auth key")
        return self.keys.get(key_hash)


class DictCache(CachePort):
    def __init__(self):
        self.values = {}
        self.timeouts = {}

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value, timeout=None):
        self.values[key] = value
        self.timeouts[key] = timeout

    async def delete(self, key):
        self.values.pop(key, None)
