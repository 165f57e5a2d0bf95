"""
KeyPair domain entity.

A KeyPair is an RSA signing key pair held in custody for one tenant.
Key material is produced once, at generation, and never changes after.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from cryptography.hazmat.primitives.asymmetric import rsa

from core.domain.entity import with_timestamps
from keys.domain import pem_codec

# Placeholder returned instead of the private key to non-privileged callers
REDACTED = "****** REDACTED ******"

KEY_SIZE = 2048
PUBLIC_EXPONENT = 65537


@dataclass(frozen=True)
class KeyPair:
    """
    KeyPair domain entity.

    created_at/updated_at are assigned by storage and cannot be passed
    to the constructor.
    """

    id: str
    label: str
    created_by: str
    updated_by: str
    private_key: str
    public_key: str
    description: Optional[str] = None
    created_at: Optional[datetime] = field(default=None, init=False)
    updated_at: Optional[datetime] = field(default=None, init=False)

    def __post_init__(self):
        """Validate key pair entity."""
        if not self.id:
            raise ValueError("Key pair ID is required")

    @classmethod
    def generate(
        cls,
        label: str,
        created_by: str,
        updated_by: str,
        description: Optional[str] = None,
        key_id: Optional[str] = None,
    ) -> "KeyPair":
        """
        Generate a fresh 2048-bit RSA key pair.

        Args:
            label: Display label
            created_by: Actor creating the key
            updated_by: Actor recorded as last updater
            description: Optional free text
            key_id: Optional identifier (generated if not provided)

        Returns:
            KeyPair entity holding both PEM halves
        """
        private_key = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=KEY_SIZE)
        return cls(
            id=key_id or str(uuid.uuid4()),
            label=label,
            created_by=created_by,
            updated_by=updated_by,
            private_key=pem_codec.encode_private_key(private_key),
            public_key=pem_codec.encode_public_key(private_key.public_key()),
            description=description,
        )

    def redacted(self) -> "KeyPair":
        """
        Return a copy with the private key replaced by REDACTED.

        Returns:
            Redacted copy; timestamps are carried over
        """
        return with_timestamps(replace(self, private_key=REDACTED), self.created_at, self.updated_at)

    def with_metadata(self, label: str, description: Optional[str], updated_by: str) -> "KeyPair":
        """
        Return a copy with new label/description/updater.

        Key material is carried over untouched.
        """
        copy = replace(self, label=label, description=description, updated_by=updated_by)
        return with_timestamps(copy, self.created_at, self.updated_at)

    @property
    def is_redacted(self) -> bool:
        return self.private_key == REDACTED
