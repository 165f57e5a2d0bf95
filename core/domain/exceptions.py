"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Every exception carries
an ErrorKind so it can be converted into a Result at a service
boundary or into an HTTP status at the API boundary.
"""
from core.domain.result import ErrorKind


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.kind.code

    @classmethod
    def for_kind(cls, kind: ErrorKind, message: str) -> "DomainException":
        """
        Build the exception matching an error kind.

        Used to re-raise an Err received from another service.
        """
        for subclass in cls.__subclasses__():
            if subclass.kind is kind:
                return subclass(message)
        return cls(message)


class ValidationError(DomainException):
    """Raised when caller input is missing or malformed."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str = "Invalid request body"):
        super().__init__(message)


class NotFoundError(DomainException):
    """Raised when no matching row exists."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class ConflictError(DomainException):
    """Raised when a uniqueness constraint is violated in storage."""

    kind = ErrorKind.CONFLICT

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)


class KeyFormatError(DomainException):
    """Raised when PEM/DER key material cannot be decoded."""

    kind = ErrorKind.KEY_FORMAT

    def __init__(self, message: str = "Invalid key format"):
        super().__init__(message)


class InternalError(DomainException):
    """Raised when an invariant that should always hold is broken."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str = "An internal error occurred"):
        super().__init__(message)


class StorageError(DomainException):
    """Raised for any persistence fault other than a conflict."""

    kind = ErrorKind.STORAGE

    def __init__(self, message: str = "Storage error"):
        super().__init__(message)
