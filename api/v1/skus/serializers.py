"""
Serializers for sku catalog endpoints.
"""
from rest_framework import serializers


class SkuSerializer(serializers.Serializer):
    """Serializer for Sku entities."""

    code = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField(allow_null=True)


class CreateSkuRequestSerializer(serializers.Serializer):
    """Serializer for sku creation request."""

    code = serializers.CharField(required=True, max_length=255)
    name = serializers.CharField(required=True, max_length=255)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)


class UpdateSkuRequestSerializer(serializers.Serializer):
    """Serializer for sku update request. The code is taken from the URL."""

    name = serializers.CharField(required=True, max_length=255)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
