"""
Result type for service operations.

Service operations return Ok(value) or Err(kind, message) instead of
raising, so callers branch on an explicit error kind.
"""
import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Error taxonomy shared by every service."""

    VALIDATION = ("VALIDATION_ERROR", 400)
    NOT_FOUND = ("NOT_FOUND", 404)
    CONFLICT = ("CONFLICT", 409)
    KEY_FORMAT = ("KEY_FORMAT_ERROR", 400)
    INTERNAL = ("INTERNAL_ERROR", 500)
    STORAGE = ("STORAGE_ERROR", 500)

    def __init__(self, code: str, http_status: int):
        self.code = code
        self.http_status = http_status

    def __str__(self) -> str:
        """Return kind as its error code."""
        return self.code


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed result carrying an error kind and message."""

    kind: ErrorKind
    message: str

    @property
    def is_ok(self) -> bool:
        return False

    @classmethod
    def from_exception(cls, exc: Exception) -> "Err":
        """
        Build an Err from a domain exception.

        Args:
            exc: DomainException instance

        Returns:
            Err with the exception's kind and message
        """
        return cls(kind=exc.kind, message=exc.message)


Result = Union[Ok[T], Err]


def returns_result(log_message: Optional[str] = None):
    """
    Convert domain exceptions raised by an async operation into Err.

    DomainException subclasses keep their kind; any other exception is
    logged with its traceback and becomes Err(INTERNAL).

    Args:
        log_message: Message logged when the operation fails

    Returns:
        Decorator for async service methods
    """
    from core.domain.exceptions import DomainException

    def decorator(func: Callable[..., Awaitable[Any]]):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except DomainException as exc:
                if exc.kind.http_status >= 500:
                    logger.error("%s: %s", log_message or func.__qualname__, exc.message)
                else:
                    logger.info("%s: %s", log_message or func.__qualname__, exc.message)
                return Err.from_exception(exc)
            except Exception:  # pylint: disable=broad-exception-caught
                logger.exception("%s: unexpected error", log_message or func.__qualname__)
                return Err(kind=ErrorKind.INTERNAL, message="An internal error occurred")

        return wrapper

    return decorator
