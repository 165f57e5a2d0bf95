"""
Unit tests for the license token codec.
"""

import time

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from core.domain.exceptions import KeyFormatError
from keys.domain import pem_codec
from licenses.domain import token_codec
from licenses.domain.features import FeatureGrant


@pytest.fixture(scope="module")
def pems():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return pem_codec.encode_private_key(key), pem_codec.encode_public_key(key.public_key())


@pytest.fixture
def claims():
    return token_codec.build_claims(
        customer_id="cust-1",
        issuer="alice",
        features=[FeatureGrant(sku="PRO", expiry=1_900_000_000)],
        jti="license-1",
        issued_at=1_700_000_000,
    )


class TestBuildClaims:
    """Tests for build_claims."""

    def test_claim_set(self, claims):
        """Test every claim of a new token."""
        assert claims["aud"] == "cust-1"
        assert claims["iss"] == "alice"
        assert claims["sub"] == "License Token Service"
        assert claims["jti"] == "license-1"
        assert claims["iat"] == claims["nbf"] == 1_700_000_000
        assert claims["exp"] == 1_700_000_000 + 7 * 24 * 3600
        assert isinstance(claims[token_codec.FEATURES_CLAIM], str)

    def test_generates_jti(self):
        """Test a jti is generated when not given."""
        built = token_codec.build_claims("cust-1", "alice", [])

        assert built["jti"]


class TestSignAndVerify:
    """Tests for signing and verifying tokens."""

    def test_header_carries_kid(self, pems):
        """Test the signed header names the algorithm and key id."""
        private_pem, _ = pems
        token = token_codec.sign_token(token_codec.build_claims("c", "i", []), private_pem, "key-1")

        header = token_codec.read_unverified_header(token)

        assert header["kid"] == "key-1"
        assert header["alg"] == "RS256"
        assert header["typ"] == "JWT"

    def test_verify_returns_claims(self, pems):
        """Test a fresh token verifies with the matching public key."""
        private_pem, public_pem = pems
        built = token_codec.build_claims("cust-1", "alice", [])
        token = token_codec.sign_token(built, private_pem, "key-1")

        assert token_codec.verify_token(token, public_pem) == built

    def test_expired_token(self, pems, claims):
        """Test an expired token is rejected."""
        private_pem, public_pem = pems
        claims["exp"] = int(time.time()) - 60
        token = token_codec.sign_token(claims, private_pem, "key-1")

        with pytest.raises(jwt.ExpiredSignatureError):
            token_codec.verify_token(token, public_pem)

    def test_tampered_token(self, pems):
        """Test a modified payload fails signature verification."""
        private_pem, public_pem = pems
        token = token_codec.sign_token(token_codec.build_claims("cust-1", "alice", []), private_pem, "key-1")
        other = token_codec.sign_token(token_codec.build_claims("cust-2", "alice", []), private_pem, "key-1")
        header, _, signature = token.split(".")
        forged = ".".join([header, other.split(".")[1], signature])

        with pytest.raises(jwt.InvalidSignatureError):
            token_codec.verify_token(forged, public_pem)

    def test_audience_and_issuer_checked_when_given(self, pems):
        """Test expected audience and issuer are enforced only on request."""
        private_pem, public_pem = pems
        token = token_codec.sign_token(token_codec.build_claims("cust-1", "alice", []), private_pem, "key-1")

        assert token_codec.verify_token(token, public_pem, issuer="alice", audience="cust-1")
        with pytest.raises(jwt.InvalidAudienceError):
            token_codec.verify_token(token, public_pem, audience="cust-2")
        with pytest.raises(jwt.InvalidIssuerError):
            token_codec.verify_token(token, public_pem, issuer="mallory")

    def test_bad_public_key(self, pems):
        """Test unusable key material raises KeyFormatError."""
        private_pem, _ = pems
        token = token_codec.sign_token(token_codec.build_claims("c", "i", []), private_pem, "key-1")

        with pytest.raises(KeyFormatError):
            token_codec.verify_token(token, "-----BEGIN PUBLIC KEY-----\nAAAA\n-----END PUBLIC KEY-----\n")

    def test_read_unverified_features(self, pems, claims):
        """Test features are recovered from a stored token."""
        private_pem, _ = pems
        token = token_codec.sign_token(claims, private_pem, "key-1")

        assert token_codec.read_unverified_features(token) == [FeatureGrant(sku="PRO", expiry=1_900_000_000)]
