"""
InternalAuthKey repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Optional

from access.domain.internal_auth_key import InternalAuthKey


class InternalAuthKeyRepository(ABC):
    """Abstract repository for InternalAuthKey entities."""

    @abstractmethod
    async def add(self, auth_key: InternalAuthKey) -> InternalAuthKey:
        pass

    @abstractmethod
    async def find_by_hash(self, key_hash: str) -> Optional[InternalAuthKey]:
        """
        Find an auth key by the sha256 of its raw value.

        Args:
            key_hash: Hex digest

        Returns:
            InternalAuthKey or None if not found
        """
        pass
