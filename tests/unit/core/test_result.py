"""
Unit tests for the Result type and error taxonomy.
"""

import pytest

from core.domain.exceptions import (
    ConflictError,
    DomainException,
    InternalError,
    KeyFormatError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from core.domain.result import Err, ErrorKind, Ok, returns_result


class TestErrorKind:
    """Tests for ErrorKind."""

    @pytest.mark.parametrize(
        "kind,status",
        [
            (ErrorKind.VALIDATION, 400),
            (ErrorKind.NOT_FOUND, 404),
            (ErrorKind.CONFLICT, 409),
            (ErrorKind.KEY_FORMAT, 400),
            (ErrorKind.INTERNAL, 500),
            (ErrorKind.STORAGE, 500),
        ],
    )
    def test_http_status(self, kind, status):
        """Test every kind maps to its HTTP status."""
        assert kind.http_status == status

    def test_str_is_code(self):
        """Test str() of a kind is its error code."""
        assert str(ErrorKind.NOT_FOUND) == "NOT_FOUND"


class TestExceptions:
    """Tests for domain exceptions."""

    def test_each_exception_carries_its_kind(self):
        """Test exceptions expose kind and code."""
        assert ValidationError().kind is ErrorKind.VALIDATION
        assert NotFoundError().code == "NOT_FOUND"
        assert ConflictError().kind is ErrorKind.CONFLICT
        assert KeyFormatError().kind is ErrorKind.KEY_FORMAT
        assert StorageError().kind is ErrorKind.STORAGE
        assert InternalError().kind is ErrorKind.INTERNAL

    def test_for_kind_rebuilds_matching_exception(self):
        """Test for_kind returns the subclass for a kind."""
        exc = DomainException.for_kind(ErrorKind.NOT_FOUND, "Sku X not found")

        assert isinstance(exc, NotFoundError)
        assert exc.message == "Sku X not found"


class TestReturnsResult:
    """Tests for the returns_result decorator."""

    @pytest.mark.asyncio
    async def test_passes_ok_through(self):
        """Test a returned Ok is untouched."""

        @returns_result()
        async def operation():
            return Ok(42)

        result = await operation()

        assert result.is_ok
        assert result.value == 42

    @pytest.mark.asyncio
    async def test_converts_domain_exception(self):
        """Test a raised domain exception becomes Err."""

        @returns_result("Operation failed")
        async def operation():
            raise ConflictError("Sku A already exists")

        result = await operation()

        assert result == Err(ErrorKind.CONFLICT, "Sku A already exists")
        assert not result.is_ok

    @pytest.mark.asyncio
    async def test_converts_unexpected_exception_to_internal(self, caplog):
        """Test an unexpected exception becomes Err(INTERNAL) without leaking its text."""

        @returns_result("Operation failed")
        async def operation():
            raise RuntimeError("boom")

        result = await operation()

        assert result == Err(ErrorKind.INTERNAL, "An internal error occurred")
        assert "Operation failed: unexpected error" in caplog.text
