"""
Serializers for key pair endpoints.
"""
from rest_framework import serializers


class KeyPairSerializer(serializers.Serializer):
    """Serializer for KeyPair entities. private_key may be the redaction sentinel."""

    id = serializers.CharField()
    label = serializers.CharField()
    created_by = serializers.CharField()
    updated_by = serializers.CharField()
    private_key = serializers.CharField()
    public_key = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField(allow_null=True)


class GenerateKeyPairRequestSerializer(serializers.Serializer):
    """Serializer for key generation request."""

    label = serializers.CharField(required=True, allow_blank=True, max_length=255)
    created_by = serializers.CharField(required=True, allow_blank=True, max_length=255)
    updated_by = serializers.CharField(required=True, allow_blank=True, max_length=255)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)


class UpdateKeyPairRequestSerializer(serializers.Serializer):
    """Serializer for key metadata update request."""

    label = serializers.CharField(required=True, allow_blank=True, max_length=255)
    updated_by = serializers.CharField(required=True, allow_blank=True, max_length=255)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
