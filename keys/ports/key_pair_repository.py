"""
KeyPair repository port (interface).

This defines the contract for the key vault store.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain.pagination import PageRequest
from keys.domain.key_pair import KeyPair


class KeyPairRepository(ABC):
    """
    Abstract repository for KeyPair entities.

    Implementations raise ConflictError on duplicate identifiers and
    StorageError on any other persistence fault.
    """

    @abstractmethod
    async def add(self, key_pair: KeyPair) -> KeyPair:
        """
        Insert a new key pair.

        Args:
            key_pair: KeyPair entity to insert

        Returns:
            Stored key pair with timestamps assigned
        """
        pass

    @abstractmethod
    async def update_metadata(self, key_pair: KeyPair) -> Optional[KeyPair]:
        """
        Update label, description and updated_by of an existing key pair.

        Key material columns are never written.

        Args:
            key_pair: KeyPair carrying the new metadata

        Returns:
            Stored key pair or None if not found
        """
        pass

    @abstractmethod
    async def delete(self, key_id: str) -> Optional[KeyPair]:
        """
        Delete a key pair permanently.

        Args:
            key_id: Key pair identifier

        Returns:
            The deleted key pair or None if not found
        """
        pass

    @abstractmethod
    async def find_by_id(self, key_id: str) -> Optional[KeyPair]:
        """
        Find a key pair by ID.

        Args:
            key_id: Key pair identifier

        Returns:
            KeyPair entity or None if not found
        """
        pass

    @abstractmethod
    async def list(self, page: PageRequest) -> List[KeyPair]:
        """
        List key pairs ordered by creation time ascending.

        Args:
            page: Offset/limit window

        Returns:
            List of KeyPair entities
        """
        pass
