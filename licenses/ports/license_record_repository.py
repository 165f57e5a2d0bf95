"""
LicenseRecord repository port (interface).

This defines the contract for license record persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain.pagination import PageRequest
from licenses.domain.license_record import LicenseDetails, LicenseRecord


class LicenseRecordRepository(ABC):
    """
    Abstract repository for LicenseRecord entities.

    Detail reads left-join the customer; a missing customer yields a
    LicenseCustomer with name None. Features on returned details are
    left empty for the caller to recompute from the token.
    """

    @abstractmethod
    async def add(self, record: LicenseRecord) -> LicenseRecord:
        """
        Insert a new license record.

        Raises:
            ConflictError: If the id is already taken
        """
        pass

    @abstractmethod
    async def update(self, record: LicenseRecord) -> Optional[LicenseRecord]:
        """
        Update label and description. The token is never rewritten.

        Returns:
            Stored record or None if not found
        """
        pass

    @abstractmethod
    async def delete(self, license_id: str) -> Optional[LicenseRecord]:
        """
        Delete a license record.

        Returns:
            Deleted record or None if not found
        """
        pass

    @abstractmethod
    async def find_by_id(self, license_id: str) -> Optional[LicenseRecord]:
        pass

    @abstractmethod
    async def find_details_by_id(self, license_id: str) -> Optional[LicenseDetails]:
        pass

    @abstractmethod
    async def list_details(
        self, page: PageRequest, customer_id: Optional[str] = None
    ) -> List[LicenseDetails]:
        """
        List records joined with customers, oldest first.

        Args:
            page: Offset/limit window
            customer_id: Restrict to one customer when given

        Returns:
            List of LicenseDetails
        """
        pass
