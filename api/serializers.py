"""
Serializers shared by every v1 resource.
"""
from rest_framework import serializers

from core.domain.pagination import DEFAULT_LIMIT, MAX_LIMIT, PageRequest


class PageQuerySerializer(serializers.Serializer):
    """Offset/limit query parameters."""

    offset = serializers.IntegerField(required=False, default=0, min_value=0)
    limit = serializers.IntegerField(required=False, default=DEFAULT_LIMIT, min_value=1, max_value=MAX_LIMIT)

    def to_page_request(self) -> PageRequest:
        return PageRequest(offset=self.validated_data["offset"], limit=self.validated_data["limit"])


def page_payload(page, item_serializer_class) -> dict:
    """Render a Page with the given item serializer."""
    return {
        "offset": page.offset,
        "limit": page.limit,
        "count": page.count,
        "results": item_serializer_class(page.results, many=True).data,
    }
