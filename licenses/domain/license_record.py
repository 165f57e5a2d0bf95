"""
License record domain entities.

A LicenseRecord is the stored copy of an issued token together with
its descriptive metadata.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from core.domain.entity import with_timestamps
from licenses.domain.features import FeatureGrant


@dataclass(frozen=True)
class LicenseRecord:
    """
    LicenseRecord domain entity.

    id equals the token's jti claim. The token text never changes
    after issuance.
    """

    id: str
    label: str
    issued_by: str
    customer_id: str
    token: str
    key_id: str
    description: Optional[str] = None
    created_at: Optional[datetime] = field(default=None, init=False)
    updated_at: Optional[datetime] = field(default=None, init=False)

    def __post_init__(self):
        """Validate license record entity."""
        if not self.id:
            raise ValueError("License ID is required")

    def with_metadata(self, label: str, description: Optional[str]) -> "LicenseRecord":
        """
        Create a new LicenseRecord instance with updated label/description.

        Args:
            label: New label
            description: New description

        Returns:
            New LicenseRecord instance, token untouched
        """
        return with_timestamps(
            LicenseRecord(
                id=self.id,
                label=label,
                issued_by=self.issued_by,
                customer_id=self.customer_id,
                token=self.token,
                key_id=self.key_id,
                description=description,
            ),
            self.created_at,
            self.updated_at,
        )


@dataclass(frozen=True)
class LicenseCustomer:
    """Customer side of the license/customer left join."""

    id: str
    name: Optional[str] = None


@dataclass(frozen=True)
class LicenseDetails:
    """
    A license record joined with its customer.

    features is recomputed from the stored token, never stored.
    """

    record: LicenseRecord
    customer: LicenseCustomer
    features: List[FeatureGrant] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.record.id
