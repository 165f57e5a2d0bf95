"""
Helpers for entities whose timestamps are owned by storage.
"""
from dataclasses import replace
from datetime import datetime
from typing import Optional, TypeVar

E = TypeVar("E")


def with_timestamps(entity: E, created_at: Optional[datetime], updated_at: Optional[datetime]) -> E:
    """
    Return a copy of a frozen entity carrying storage-assigned timestamps.

    Entities declare created_at/updated_at with init=False so callers
    cannot set them; only persistence adapters go through this function.

    Args:
        entity: Frozen dataclass entity
        created_at: Creation timestamp from storage
        updated_at: Update timestamp from storage

    Returns:
        Stamped copy of the entity
    """
    stamped = replace(entity)
    object.__setattr__(stamped, "created_at", created_at)
    object.__setattr__(stamped, "updated_at", updated_at)
    return stamped
