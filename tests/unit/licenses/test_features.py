"""
Unit tests for feature grant serialization.
"""

import json

import pytest

from licenses.domain.features import FeatureGrant, RateLimit, parse_features, serialize_features


class TestFeatures:
    """Tests for the features claim payload."""

    def test_serialized_shape(self):
        """Test grants serialize to a compact JSON list."""
        grants = [FeatureGrant(sku="PRO", expiry=1_900_000_000, rate_limits=[RateLimit("api", 100, 60)])]

        payload = serialize_features(grants)

        assert json.loads(payload) == [
            {
                "sku": "PRO",
                "expiry": 1_900_000_000,
                "rate_limits": [{"name": "api", "limit": 100, "period": 60}],
            }
        ]
        assert " " not in payload

    def test_parse_restores_grants(self):
        """Test a serialized claim parses back to equal grants."""
        grants = [
            FeatureGrant(sku="PRO", expiry=1, rate_limits=[RateLimit("api", 10, 1)]),
            FeatureGrant(sku="ENT", expiry=2),
        ]

        assert parse_features(serialize_features(grants)) == grants

    def test_rate_limits_optional(self):
        """Test grants without rate_limits parse to an empty list."""
        grants = parse_features('[{"sku": "PRO", "expiry": 5}]')

        assert grants == [FeatureGrant(sku="PRO", expiry=5)]

    @pytest.mark.parametrize(
        "payload",
        [
            "not json",
            '{"sku": "PRO"}',
            '[{"expiry": 5}]',
            '[{"sku": "", "expiry": 5}]',
            '["PRO"]',
            '[{"sku": "PRO", "expiry": "soon"}]',
        ],
    )
    def test_malformed_payload(self, payload):
        """Test malformed claims raise ValueError."""
        with pytest.raises(ValueError):
            parse_features(payload)

    @pytest.mark.parametrize(
        "payload,message",
        [
            ('[{"sku": "PRO", "expiry": 1, "rate_limits": ["x"]}]', "rate limit entry must be an object"),
            ('[{"sku": "PRO", "expiry": 1, "rate_limits": {"name": "rps"}}]', "feature 'rate_limits' must be a list"),
            ('[{"sku": "PRO", "expiry": 1, "rate_limits": [{"name": "rps", "period": 1}]}]', "rate limit is missing 'limit'"),
            ('[{"sku": "PRO", "expiry": [1]}]', "feature 'expiry' must be an integer"),
            ('["PRO"]', "feature entry must be an object"),
            ('[{"expiry": 5}]', "feature 'sku' must be a non-empty string"),
            ("not json", "not valid JSON"),
        ],
    )
    def test_malformed_payload_message_names_the_shape(self, payload, message):
        """Test malformed claims report which part of the claim is wrong."""
        with pytest.raises(ValueError) as exc_info:
            parse_features(payload)

        assert str(exc_info.value) == f"Malformed features claim: {message}"
