"""
GenerateKeyPairCommand.

Command to generate and store a new signing key pair.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class GenerateKeyPairCommand:
    """Command to generate a key pair."""

    label: str
    created_by: str
    updated_by: str
    description: Optional[str] = None
