"""
UpdateKeyPairCommand.

Command to change key pair metadata. Key material is never part of it.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class UpdateKeyPairCommand:
    """Command to update label/description of a key pair."""

    label: str
    updated_by: str
    description: Optional[str] = None
