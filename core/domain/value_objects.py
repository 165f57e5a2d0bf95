"""
Value objects for the domain.
"""
from enum import Enum


class Role(Enum):
    """Role granted to an internal API key."""

    NONE = "none"
    GENERAL = "general"
    LICENSE_ADMIN = "license-admin"
    ADMIN = "admin"

    def __str__(self) -> str:
        """Return role as string."""
        return self.value

    @classmethod
    def parse(cls, value: str) -> "Role":
        """
        Parse a stored role string.

        Args:
            value: Role string

        Returns:
            Matching Role, or Role.NONE for blank/unknown values
        """
        normalized = (value or "").strip().lower()
        for role in cls:
            if role.value == normalized:
                return role
        return cls.NONE

    @property
    def is_elevated(self) -> bool:
        """True for roles allowed to see or mutate key material."""
        return self in (Role.LICENSE_ADMIN, Role.ADMIN)
