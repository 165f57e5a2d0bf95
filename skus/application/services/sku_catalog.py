"""
Sku catalog service.

Validates feature requests against the catalog and manages catalog
entries.
"""
import logging
from typing import List, Optional, Sequence, TypeVar

from core.domain.exceptions import ConflictError, NotFoundError, ValidationError
from core.domain.pagination import Page, PageRequest
from core.domain.result import Ok, Result, returns_result
from skus.domain.sku import Sku
from skus.ports.sku_repository import SkuRepository

logger = logging.getLogger(__name__)

# Upper bound on codes resolved in a single catalog lookup
MAX_CODES_PER_LOOKUP = 1000

G = TypeVar("G")


def dedupe_by_sku(features: Sequence[G]) -> List[G]:
    """
    Drop repeated SKU references, keeping the first occurrence.

    Args:
        features: Feature grants in request order (anything with a .sku)

    Returns:
        Grants with unique SKUs, input order preserved
    """
    seen = set()
    unique = []
    for feature in features:
        if feature.sku in seen:
            continue
        seen.add(feature.sku)
        unique.append(feature)
    return unique


class SkuCatalog:
    """Service for the sku catalog."""

    def __init__(self, repository: SkuRepository):
        """Initialize catalog with sku repository."""
        self.repository = repository

    async def _find_by_codes(self, codes: Sequence[str]) -> List[Sku]:
        if len(codes) > MAX_CODES_PER_LOOKUP:
            raise ValidationError(f"At most {MAX_CODES_PER_LOOKUP} sku codes can be looked up at once")
        return await self.repository.find_by_codes(codes)

    @returns_result()
    async def validate_feature_request(self, features: Optional[Sequence[G]]) -> Result[List[G]]:
        """
        Check that every requested SKU exists in the catalog.

        Args:
            features: Requested feature grants

        Returns:
            Ok(deduplicated grants) or Err(VALIDATION)
        """
        if not features:
            raise ValidationError("Features are required")

        unique = dedupe_by_sku(features)
        found = await self._find_by_codes([feature.sku for feature in unique])
        if len(found) < len(unique):
            logger.info("Rejected feature request: %d of %d skus known", len(found), len(unique))
            raise ValidationError("Invalid features")
        return Ok(unique)

    @returns_result()
    async def find_by_codes(self, codes: Sequence[str]) -> Result[List[Sku]]:
        """Return the skus matching codes; unknown codes are skipped."""
        return Ok(await self._find_by_codes(codes))

    @returns_result("Sku creation failed")
    async def add_sku(self, code: str, name: str, description: Optional[str] = None) -> Result[Sku]:
        """
        Add a catalog entry.

        Returns:
            Ok(Sku) or Err(VALIDATION | CONFLICT | STORAGE)
        """
        try:
            sku = Sku(code=code, name=name, description=description)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        if await self.repository.find_by_code(sku.code) is not None:
            raise ConflictError(f"Sku {sku.code} already exists")
        if await self.repository.find_by_name(sku.name) is not None:
            raise ConflictError(f"Sku named {sku.name} already exists")

        saved = await self.repository.add(sku)
        logger.info("Added sku %s", saved.code)
        return Ok(saved)

    @returns_result()
    async def get_by_code(self, code: str) -> Result[Sku]:
        sku = await self.repository.find_by_code(code)
        if sku is None:
            raise NotFoundError(f"Sku {code} not found")
        return Ok(sku)

    @returns_result()
    async def get_by_name(self, name: str) -> Result[Sku]:
        sku = await self.repository.find_by_name(name)
        if sku is None:
            raise NotFoundError(f"Sku named {name} not found")
        return Ok(sku)

    @returns_result()
    async def list_skus(self, page: PageRequest) -> Result[Page[Sku]]:
        """List catalog entries ordered by code."""
        return Ok(Page.of(page, await self.repository.list(page)))

    @returns_result("Sku update failed")
    async def update_sku(self, code: str, name: str, description: Optional[str] = None) -> Result[Sku]:
        """
        Rename a catalog entry or change its description.

        Returns:
            Ok(Sku) or Err(VALIDATION | NOT_FOUND | CONFLICT | STORAGE)
        """
        existing = await self.repository.find_by_code(code)
        if existing is None:
            raise NotFoundError(f"Sku {code} not found")

        try:
            updated = existing.with_details(name=name, description=description)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        holder = await self.repository.find_by_name(updated.name)
        if holder is not None and holder.code != code:
            raise ConflictError(f"Sku named {updated.name} already exists")

        saved = await self.repository.update(updated)
        if saved is None:
            raise NotFoundError(f"Sku {code} not found")
        return Ok(saved)

    @returns_result("Sku deletion failed")
    async def delete_sku(self, code: str) -> Result[Sku]:
        deleted = await self.repository.delete(code)
        if deleted is None:
            raise NotFoundError(f"Sku {code} not found")
        logger.info("Deleted sku %s", code)
        return Ok(deleted)
