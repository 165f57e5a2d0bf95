"""
Unit tests for pagination value objects.
"""

import pytest

from core.domain.exceptions import ValidationError
from core.domain.pagination import MAX_LIMIT, Page, PageRequest


class TestPageRequest:
    """Tests for PageRequest."""

    def test_defaults(self):
        """Test default window starts at zero with the maximum size."""
        page = PageRequest()

        assert page.offset == 0
        assert page.limit == MAX_LIMIT

    def test_negative_offset_rejected(self):
        """Test negative offsets are rejected."""
        with pytest.raises(ValidationError):
            PageRequest(offset=-1)

    @pytest.mark.parametrize("limit", [0, MAX_LIMIT + 1])
    def test_limit_out_of_range_rejected(self, limit):
        """Test limits outside 1..1000 are rejected."""
        with pytest.raises(ValidationError):
            PageRequest(limit=limit)


class TestPage:
    """Tests for Page."""

    def test_of_copies_window_and_counts(self):
        """Test Page.of keeps the request window and counts results."""
        page = Page.of(PageRequest(offset=10, limit=5), ["a", "b"])

        assert page.offset == 10
        assert page.limit == 5
        assert page.count == 2
