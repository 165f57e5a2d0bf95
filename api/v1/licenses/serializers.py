"""
Serializers for license endpoints.
"""
from rest_framework import serializers

from licenses.domain.features import FeatureGrant


class RateLimitSerializer(serializers.Serializer):
    """Serializer for a rate limit inside a feature grant."""

    name = serializers.CharField()
    limit = serializers.IntegerField()
    period = serializers.IntegerField()


class FeatureGrantSerializer(serializers.Serializer):
    """Serializer for a feature grant."""

    sku = serializers.CharField()
    expiry = serializers.IntegerField()
    rate_limits = RateLimitSerializer(many=True, required=False, default=list)


class IssueLicenseRequestSerializer(serializers.Serializer):
    """Serializer for license issuance request."""

    key_id = serializers.CharField(required=True, allow_blank=True)
    issued_by = serializers.CharField(required=True, allow_blank=True)
    customer_id = serializers.CharField(required=True, allow_blank=True)
    label = serializers.CharField(required=True, allow_blank=True, max_length=255)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    features = FeatureGrantSerializer(many=True, required=False, allow_null=True, allow_empty=True, default=None)

    def features_as_grants(self):
        features = self.validated_data.get("features")
        if features is None:
            return None
        return [FeatureGrant.from_dict(item) for item in features]


class UpdateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for license metadata update request."""

    label = serializers.CharField(required=True, allow_blank=True, max_length=255)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)


class LicenseRecordSerializer(serializers.Serializer):
    """Serializer for LicenseRecord entities."""

    id = serializers.CharField()
    label = serializers.CharField()
    issued_by = serializers.CharField()
    customer_id = serializers.CharField()
    key_id = serializers.CharField()
    token = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField(allow_null=True)


class LicenseCustomerSerializer(serializers.Serializer):
    """Serializer for the joined customer."""

    id = serializers.CharField()
    name = serializers.CharField(allow_null=True)


class LicenseDetailsSerializer(serializers.Serializer):
    """Serializer for LicenseDetails: record fields plus customer and features."""

    id = serializers.CharField(source="record.id")
    label = serializers.CharField(source="record.label")
    issued_by = serializers.CharField(source="record.issued_by")
    key_id = serializers.CharField(source="record.key_id")
    token = serializers.CharField(source="record.token")
    description = serializers.CharField(source="record.description", allow_null=True)
    created_at = serializers.DateTimeField(source="record.created_at", allow_null=True)
    updated_at = serializers.DateTimeField(source="record.updated_at", allow_null=True)
    customer = LicenseCustomerSerializer()
    features = FeatureGrantSerializer(many=True)


class ValidateTokenRequestSerializer(serializers.Serializer):
    """Serializer for token validation request."""

    token = serializers.CharField(required=True, trim_whitespace=True)


class TokenValidationSerializer(serializers.Serializer):
    """Serializer for TokenValidation results."""

    is_valid = serializers.BooleanField()
    reason = serializers.CharField(allow_null=True)
    key_id = serializers.CharField(allow_null=True)
    features = FeatureGrantSerializer(many=True)
