"""
UpdateLicenseCommand.

Command to change the label and description of an issued license.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class UpdateLicenseCommand:
    """Command to update license metadata."""

    label: str
    description: Optional[str] = None
