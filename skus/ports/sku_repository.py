"""
Sku repository port (interface).

This defines the contract for sku catalog persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from core.domain.pagination import PageRequest
from skus.domain.sku import Sku


class SkuRepository(ABC):
    """
    Abstract repository for Sku entities.

    Implementations raise ConflictError when a code or name is already
    taken and StorageError on any other persistence fault.
    """

    @abstractmethod
    async def add(self, sku: Sku) -> Sku:
        """Insert a new sku."""
        pass

    @abstractmethod
    async def update(self, sku: Sku) -> Optional[Sku]:
        """
        Update name and description of an existing sku.

        Returns:
            Stored sku or None if the code is unknown
        """
        pass

    @abstractmethod
    async def delete(self, code: str) -> Optional[Sku]:
        """
        Delete a sku by code.

        Returns:
            Deleted sku or None if not found
        """
        pass

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Sku]:
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Sku]:
        pass

    @abstractmethod
    async def find_by_codes(self, codes: Iterable[str]) -> List[Sku]:
        """
        Find every sku whose code is in codes.

        Unknown codes are silently absent from the result.
        """
        pass

    @abstractmethod
    async def list(self, page: PageRequest) -> List[Sku]:
        """List skus ordered by code."""
        pass
