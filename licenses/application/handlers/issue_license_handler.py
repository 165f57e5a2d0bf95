"""
IssueLicenseHandler.

Runs a license issuance through its stages:

    VALIDATING -> SKU_CHECKING -> KEY_SIGNING -> SELF_VERIFYING -> PERSISTING -> DONE

A failure in any stage ends the run in FAILED without entering the
later stages.
"""
import logging
import uuid
from enum import Enum
from typing import List

from asgiref.sync import sync_to_async

from core.domain.exceptions import DomainException, InternalError, ValidationError
from core.domain.result import Err, Ok, Result
from core.metrics import license_issuance_total
from keys.application.services.key_service import KeyService
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.handlers.validate_token_handler import ValidateTokenHandler
from licenses.domain import token_codec
from licenses.domain.features import FeatureGrant
from licenses.domain.license_record import LicenseRecord
from licenses.ports.license_record_repository import LicenseRecordRepository
from skus.application.services.sku_catalog import SkuCatalog

logger = logging.getLogger(__name__)

sign_token = sync_to_async(token_codec.sign_token, thread_sensitive=False)


class IssuanceStage(Enum):
    """Stages of a license issuance."""

    VALIDATING = "validating"
    SKU_CHECKING = "sku_checking"
    KEY_SIGNING = "key_signing"
    SELF_VERIFYING = "self_verifying"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(
        self,
        sku_catalog: SkuCatalog,
        key_service: KeyService,
        token_validator: ValidateTokenHandler,
        license_repository: LicenseRecordRepository,
    ):
        """Initialize handler with collaborators."""
        self.sku_catalog = sku_catalog
        self.key_service = key_service
        self.token_validator = token_validator
        self.license_repository = license_repository

    async def handle(self, command: IssueLicenseCommand) -> Result[LicenseRecord]:
        """
        Handle issue license command.

        Args:
            command: IssueLicenseCommand

        Returns:
            Ok(LicenseRecord) or Err with the failing stage's error kind
        """
        stage = IssuanceStage.VALIDATING
        try:
            self._validate(command)

            stage = IssuanceStage.SKU_CHECKING
            features = await self._check_skus(command.features)

            stage = IssuanceStage.KEY_SIGNING
            jti = str(uuid.uuid4())
            token = await self._sign(command, features, jti)

            stage = IssuanceStage.SELF_VERIFYING
            await self._self_verify(command.key_id, jti, token)

            stage = IssuanceStage.PERSISTING
            record = await self.license_repository.add(
                LicenseRecord(
                    id=jti,
                    label=command.label,
                    issued_by=command.issued_by,
                    customer_id=command.customer_id,
                    token=token,
                    key_id=command.key_id,
                    description=command.description,
                )
            )
        except DomainException as exc:
            return self._fail(stage, exc)

        license_issuance_total.labels(stage=IssuanceStage.DONE.value, outcome="issued").inc()
        logger.info(
            "Issued license %s for customer %s with key %s",
            record.id,
            record.customer_id,
            record.key_id,
        )
        return Ok(record)

    def _validate(self, command: IssueLicenseCommand) -> None:
        if (
            _is_blank(command.key_id)
            or _is_blank(command.issued_by)
            or _is_blank(command.customer_id)
            or _is_blank(command.label)
            or command.features is None
        ):
            raise ValidationError("Invalid request body")

    async def _check_skus(self, features: List[FeatureGrant]) -> List[FeatureGrant]:
        result = await self.sku_catalog.validate_feature_request(features)
        if not result.is_ok:
            raise DomainException.for_kind(result.kind, result.message)
        return result.value

    async def _sign(self, command: IssueLicenseCommand, features: List[FeatureGrant], jti: str) -> str:
        private_key = await self.key_service.get_private_key_bytes(command.key_id)
        if not private_key.is_ok:
            raise ValidationError(f"Failed to download private key for {command.key_id}")

        claims = token_codec.build_claims(
            customer_id=command.customer_id,
            issuer=command.issued_by,
            features=features,
            jti=jti,
        )
        return await sign_token(claims, private_key.value.decode("utf-8"), command.key_id)

    async def _self_verify(self, key_id: str, jti: str, token: str) -> None:
        validation = await self.token_validator.handle(token)
        if not validation.is_valid:
            logger.error(
                "Self-verification failed for license %s signed with key %s: %s",
                jti,
                key_id,
                validation.reason,
            )
            raise InternalError("Issued token failed self-verification")

    def _fail(self, stage: IssuanceStage, exc: DomainException) -> Err:
        license_issuance_total.labels(stage=stage.value, outcome=IssuanceStage.FAILED.value).inc()
        if exc.kind.http_status >= 500:
            logger.error("License issuance failed at %s: %s", stage.value, exc.message)
        else:
            logger.info("License issuance failed at %s: %s", stage.value, exc.message)
        return Err.from_exception(exc)
