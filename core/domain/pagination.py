"""
Pagination value objects.
"""
from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

from core.domain.exceptions import ValidationError

T = TypeVar("T")

DEFAULT_LIMIT = 1000
MAX_LIMIT = 1000


@dataclass(frozen=True)
class PageRequest:
    """Offset/limit window over an ordered scan."""

    offset: int = 0
    limit: int = DEFAULT_LIMIT

    def __post_init__(self):
        """Validate window bounds."""
        if self.offset < 0:
            raise ValidationError("Offset must not be negative")
        if self.limit < 1 or self.limit > MAX_LIMIT:
            raise ValidationError(f"Limit must be between 1 and {MAX_LIMIT}")


@dataclass
class Page(Generic[T]):
    """One page of results."""

    offset: int
    limit: int
    results: List[T] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Number of results in this page."""
        return len(self.results)

    @classmethod
    def of(cls, request: PageRequest, results: List[T]) -> "Page[T]":
        return cls(offset=request.offset, limit=request.limit, results=list(results))
