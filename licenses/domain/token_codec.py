"""
License token codec.

Builds, signs and verifies RS256 license tokens with PyJWT. The
header always carries the signing key id as `kid` so a verifier can
find the matching public key from the token alone.
"""
import time
import uuid
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence

import jwt

from keys.domain import pem_codec
from licenses.domain.features import FeatureGrant, parse_features, serialize_features

ALGORITHM = "RS256"
LICENSE_SUBJECT = "License Token Service"
FEATURES_CLAIM = "features"
TOKEN_LIFETIME = timedelta(days=7)


def build_claims(
    customer_id: str,
    issuer: str,
    features: Sequence[FeatureGrant],
    jti: Optional[str] = None,
    issued_at: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Assemble the claim set of a new license token.

    The expiration is always issued_at + TOKEN_LIFETIME.

    Args:
        customer_id: Audience of the token
        issuer: Issuer identifier
        features: Deduplicated feature grants
        jti: Unique token id (generated if not provided)
        issued_at: Epoch seconds (defaults to now)

    Returns:
        Claim dictionary ready for signing
    """
    now = int(issued_at if issued_at is not None else time.time())
    return {
        "aud": customer_id,
        "iss": issuer,
        "sub": LICENSE_SUBJECT,
        "jti": jti or str(uuid.uuid4()),
        FEATURES_CLAIM: serialize_features(features),
        "iat": now,
        "nbf": now,
        "exp": now + int(TOKEN_LIFETIME.total_seconds()),
    }


def sign_token(claims: Dict[str, Any], private_key_pem: str, key_id: str) -> str:
    """
    Sign claims with an RSA private key.

    Raises:
        KeyFormatError: If the PEM text is not an RSA private key
    """
    private_key = pem_codec.decode_private_key(private_key_pem)
    return jwt.encode(claims, private_key, algorithm=ALGORITHM, headers={"kid": key_id})


def read_unverified_header(token: str) -> Dict[str, Any]:
    """
    Read the token header without checking the signature.

    Raises:
        jwt.InvalidTokenError: If the token is not structurally a JWT
    """
    return jwt.get_unverified_header(token)


def verify_token(
    token: str,
    public_key_pem: str,
    issuer: Optional[str] = None,
    audience: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Issuer and audience are only checked when an expected value is
    given.

    Args:
        token: Encoded token
        public_key_pem: PEM text of the signer's public key
        issuer: Expected issuer, or None to skip the check
        audience: Expected audience, or None to skip the check

    Returns:
        Verified claims

    Raises:
        jwt.InvalidTokenError: If verification fails
        KeyFormatError: If the PEM text is not an RSA public key
    """
    public_key = pem_codec.decode_public_key(public_key_pem)
    options = {
        "require": ["exp"],
        "verify_aud": audience is not None,
        "verify_iss": issuer is not None,
    }
    kwargs: Dict[str, Any] = {}
    if audience is not None:
        kwargs["audience"] = audience
    if issuer is not None:
        kwargs["issuer"] = issuer
    return jwt.decode(token, public_key, algorithms=[ALGORITHM], options=options, **kwargs)


def read_unverified_features(token: str) -> List[FeatureGrant]:
    """
    Recover the feature grants embedded in a stored token.

    The signature is not checked; stored tokens were verified at
    issuance.

    Raises:
        jwt.InvalidTokenError: If the token cannot be decoded
        ValueError: If the features claim is malformed
    """
    claims = jwt.decode(token, options={"verify_signature": False})
    payload = claims.get(FEATURES_CLAIM)
    if payload is None:
        return []
    return parse_features(payload)
