"""
IssueLicenseCommand.

Command to issue a signed license token to a customer.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from licenses.domain.features import FeatureGrant


@dataclass
class IssueLicenseCommand:
    """
    Command to issue a license.

    features may be None when the caller omitted it; that is rejected
    during validation.
    """

    key_id: str
    issued_by: str
    customer_id: str
    label: str
    features: Optional[List[FeatureGrant]] = field(default=None)
    description: Optional[str] = None
