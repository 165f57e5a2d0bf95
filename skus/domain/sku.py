"""
Sku domain entity.

A Sku is a catalog entry that a license feature grant can reference.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.domain.entity import with_timestamps


@dataclass(frozen=True)
class Sku:
    """
    Sku domain entity.

    Both code and name are globally unique.
    """

    code: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = field(default=None, init=False)
    updated_at: Optional[datetime] = field(default=None, init=False)

    def __post_init__(self):
        """Validate sku entity."""
        if not self.code or not self.code.strip():
            raise ValueError("Sku code cannot be empty")
        if not self.name or not self.name.strip():
            raise ValueError("Sku name cannot be empty")
        if len(self.code) > 255 or len(self.name) > 255:
            raise ValueError("Sku code or name too long")

    def with_details(self, name: str, description: Optional[str]) -> "Sku":
        """
        Create a new Sku instance with updated name and description.

        The code is the identity and never changes.
        """
        return with_timestamps(
            Sku(code=self.code, name=name, description=description),
            self.created_at,
            self.updated_at,
        )
