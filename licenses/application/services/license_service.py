"""
License service.

Entry point for issuing, validating, reading and managing licenses.
"""
import logging
from dataclasses import replace
from typing import List, Optional

import jwt

from core.domain.exceptions import NotFoundError, ValidationError
from core.domain.pagination import Page, PageRequest
from core.domain.result import Ok, Result, returns_result
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.application.handlers.validate_token_handler import (
    TokenValidation,
    ValidateTokenHandler,
)
from licenses.domain import token_codec
from licenses.domain.features import FeatureGrant
from licenses.domain.license_record import LicenseDetails, LicenseRecord
from licenses.ports.license_record_repository import LicenseRecordRepository

logger = logging.getLogger(__name__)


class LicenseService:
    """
    Service for license tokens and their records.

    Feature lists shown to callers are always recovered from the stored
    token, so they match what was signed.
    """

    def __init__(
        self,
        repository: LicenseRecordRepository,
        issue_handler: IssueLicenseHandler,
        validate_handler: ValidateTokenHandler,
    ):
        """Initialize service with repository and handlers."""
        self.repository = repository
        self.issue_handler = issue_handler
        self.validate_handler = validate_handler

    async def issue_license(self, command: IssueLicenseCommand) -> Result[LicenseRecord]:
        """Issue a license token and persist its record."""
        return await self.issue_handler.handle(command)

    @returns_result()
    async def validate_token(self, token: str) -> Result[TokenValidation]:
        """
        Validate a license token.

        An invalid token is still Ok; the outcome is in the value.
        """
        if not token or not token.strip():
            raise ValidationError("Token is required")
        return Ok(await self.validate_handler.handle(token.strip()))

    @staticmethod
    def _features_of(token: str, license_id: str) -> List[FeatureGrant]:
        try:
            return token_codec.read_unverified_features(token)
        except (jwt.InvalidTokenError, ValueError) as exc:
            logger.warning("Could not read features of license %s: %s", license_id, exc)
            return []

    def _with_features(self, details: LicenseDetails) -> LicenseDetails:
        return replace(details, features=self._features_of(details.record.token, details.id))

    @returns_result()
    async def get_license_by_id(self, license_id: str) -> Result[LicenseDetails]:
        """
        Get a license joined with its customer.

        Returns:
            Ok(LicenseDetails) or Err(NOT_FOUND)
        """
        details = await self.repository.find_details_by_id(license_id)
        if details is None:
            raise NotFoundError(f"License {license_id} not found")
        return Ok(self._with_features(details))

    @returns_result()
    async def list_licenses(self, page: PageRequest) -> Result[Page[LicenseDetails]]:
        """List licenses oldest first."""
        rows = await self.repository.list_details(page)
        return Ok(Page.of(page, [self._with_features(row) for row in rows]))

    @returns_result()
    async def list_licenses_by_customer(
        self, customer_id: str, page: PageRequest
    ) -> Result[Page[LicenseDetails]]:
        """List one customer's licenses oldest first."""
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer id is required")
        rows = await self.repository.list_details(page, customer_id=customer_id)
        return Ok(Page.of(page, [self._with_features(row) for row in rows]))

    @returns_result("License update failed")
    async def update_license(
        self, license_id: str, command: UpdateLicenseCommand
    ) -> Result[LicenseRecord]:
        """
        Change label and description. The token is never touched.

        Returns:
            Ok(LicenseRecord) or Err(VALIDATION | NOT_FOUND | STORAGE)
        """
        if not command.label or not command.label.strip():
            raise ValidationError("Invalid request body")

        existing = await self.repository.find_by_id(license_id)
        if existing is None:
            raise NotFoundError(f"License {license_id} not found")

        updated = await self.repository.update(
            existing.with_metadata(label=command.label, description=command.description)
        )
        if updated is None:
            raise NotFoundError(f"License {license_id} not found")
        return Ok(updated)

    @returns_result("License deletion failed")
    async def delete_license(self, license_id: str) -> Result[LicenseRecord]:
        """
        Delete a license record.

        Copies of the token already handed out stay cryptographically valid.
        """
        deleted = await self.repository.delete(license_id)
        if deleted is None:
            raise NotFoundError(f"License {license_id} not found")
        logger.info("Deleted license %s", license_id)
        return Ok(deleted)


def build_license_service(
    repository: LicenseRecordRepository,
    key_service,
    sku_catalog,
    expected_issuer: Optional[str] = None,
    expected_audience: Optional[str] = None,
) -> LicenseService:
    """
    Wire a LicenseService with its handlers.

    Args:
        repository: License record store
        key_service: KeyService supplying key bytes
        sku_catalog: SkuCatalog validating feature requests
        expected_issuer: Enforced issuer, or None
        expected_audience: Enforced audience, or None

    Returns:
        LicenseService
    """
    validator = ValidateTokenHandler(
        key_service,
        expected_issuer=expected_issuer,
        expected_audience=expected_audience,
    )
    # Self-verification only checks signature, expiry and claim shape
    issuer = IssueLicenseHandler(
        sku_catalog=sku_catalog,
        key_service=key_service,
        token_validator=ValidateTokenHandler(key_service),
        license_repository=repository,
    )
    return LicenseService(repository, issuer, validator)
