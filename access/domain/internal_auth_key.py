"""
InternalAuthKey domain entity.
"""
import hashlib
import secrets
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from core.domain.value_objects import Role


def hash_key(raw_key: str) -> str:
    """Return the sha256 hex digest stored in place of a raw API key."""
    return hashlib.sha256(raw_key.encode()).hexdigest()


@dataclass(frozen=True)
class InternalAuthKey:
    """
    An API key allowed to call the service.

    The raw key is shown once at creation and never stored.
    """

    id: str
    key_hash: str
    role: Role
    created_by: str
    description: Optional[str] = None
    created_at: Optional[datetime] = field(default=None, init=False)
    updated_at: Optional[datetime] = field(default=None, init=False)

    def __post_init__(self):
        """Validate auth key entity."""
        if not self.key_hash:
            raise ValueError("Key hash is required")
        if not self.created_by or not self.created_by.strip():
            raise ValueError("created_by is required")

    @classmethod
    def create(
        cls, role: Role, created_by: str, description: Optional[str] = None
    ) -> Tuple["InternalAuthKey", str]:
        """
        Create a new auth key.

        Returns:
            Tuple of (entity, raw key)
        """
        raw_key = secrets.token_urlsafe(32)
        entity = cls(
            id=str(uuid.uuid4()),
            key_hash=hash_key(raw_key),
            role=role,
            created_by=created_by,
            description=description,
        )
        return entity, raw_key
