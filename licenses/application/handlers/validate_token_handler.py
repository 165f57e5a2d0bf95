"""
ValidateTokenHandler.

Verifies a license token against the public key named by its kid.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import jwt
from asgiref.sync import sync_to_async

from core.domain.exceptions import KeyFormatError
from core.metrics import token_validations_total
from keys.application.services.key_service import KeyService
from licenses.domain import token_codec
from licenses.domain.features import FeatureGrant, parse_features

logger = logging.getLogger(__name__)

# Signature checks run in a worker thread
verify_token = sync_to_async(token_codec.verify_token, thread_sensitive=False)

MISSING_KID = "missing kid"
KEY_NOT_FOUND = "key not found"
MISSING_FEATURES = "missing features claim"


@dataclass(frozen=True)
class TokenValidation:
    """Outcome of a token validation: valid, or invalid with a reason."""

    is_valid: bool
    reason: Optional[str] = None
    key_id: Optional[str] = None
    features: List[FeatureGrant] = field(default_factory=list)

    @classmethod
    def valid(cls, key_id: str, features: List[FeatureGrant]) -> "TokenValidation":
        return cls(is_valid=True, key_id=key_id, features=features)

    @classmethod
    def invalid(cls, reason: str, key_id: Optional[str] = None) -> "TokenValidation":
        return cls(is_valid=False, reason=reason, key_id=key_id)


class ValidateTokenHandler:
    """
    Handler for token validation.

    Issuer and audience are only enforced when expected values are
    configured.
    """

    def __init__(
        self,
        key_service: KeyService,
        expected_issuer: Optional[str] = None,
        expected_audience: Optional[str] = None,
    ):
        """Initialize handler with key service and optional claim checks."""
        self.key_service = key_service
        self.expected_issuer = expected_issuer
        self.expected_audience = expected_audience

    async def handle(self, token: str) -> TokenValidation:
        """
        Validate a token.

        Args:
            token: Encoded license token

        Returns:
            TokenValidation
        """
        result = await self._validate(token)
        token_validations_total.labels(outcome="valid" if result.is_valid else "invalid").inc()
        if not result.is_valid:
            logger.info("Token rejected (kid=%s): %s", result.key_id, result.reason)
        return result

    async def _validate(self, token: str) -> TokenValidation:
        try:
            header = token_codec.read_unverified_header(token)
        except jwt.InvalidTokenError as exc:
            return TokenValidation.invalid(str(exc))

        key_id = header.get("kid")
        if not key_id:
            return TokenValidation.invalid(MISSING_KID)

        public_key = await self.key_service.get_public_key_bytes(key_id)
        if not public_key.is_ok:
            return TokenValidation.invalid(KEY_NOT_FOUND, key_id)

        try:
            claims = await verify_token(
                token,
                public_key.value.decode("utf-8"),
                issuer=self.expected_issuer,
                audience=self.expected_audience,
            )
        except (jwt.InvalidTokenError, KeyFormatError) as exc:
            return TokenValidation.invalid(str(exc), key_id)

        payload = claims.get(token_codec.FEATURES_CLAIM)
        if payload is None:
            return TokenValidation.invalid(MISSING_FEATURES, key_id)

        try:
            features = parse_features(payload)
        except ValueError as exc:
            return TokenValidation.invalid(str(exc), key_id)

        return TokenValidation.valid(key_id, features)
