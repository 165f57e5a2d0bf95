"""
Key service.

Generates key pairs, keeps them in the key vault store and hands out
raw key bytes for signing and verification.
"""
import logging

from asgiref.sync import sync_to_async

from core.domain.exceptions import NotFoundError, ValidationError
from core.domain.pagination import Page, PageRequest
from core.domain.result import Ok, Result, returns_result
from core.metrics import key_pairs_generated_total
from keys.application.commands.generate_key_pair import GenerateKeyPairCommand
from keys.application.commands.update_key_pair import UpdateKeyPairCommand
from keys.domain.key_pair import KeyPair
from keys.ports.key_pair_repository import KeyPairRepository

logger = logging.getLogger(__name__)


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


class KeyService:
    """
    Service for key pair custody.

    Every operation returns Ok(value) or Err(kind, message).
    """

    def __init__(self, repository: KeyPairRepository):
        """Initialize service with key pair repository."""
        self.repository = repository

    @staticmethod
    def _present(key_pair: KeyPair, redact: bool) -> KeyPair:
        return key_pair.redacted() if redact else key_pair

    @returns_result("Key pair generation failed")
    async def generate_key_pair(self, command: GenerateKeyPairCommand) -> Result[KeyPair]:
        """
        Generate a 2048-bit RSA key pair and store it.

        The returned key pair carries the unredacted private key.

        Args:
            command: GenerateKeyPairCommand

        Returns:
            Ok(KeyPair) or Err(VALIDATION | CONFLICT | STORAGE)
        """
        if _is_blank(command.label) or _is_blank(command.created_by) or _is_blank(command.updated_by):
            raise ValidationError("Invalid request body")

        # CPU-bound, runs in a worker thread
        key_pair = await sync_to_async(KeyPair.generate, thread_sensitive=False)(
            label=command.label,
            created_by=command.created_by,
            updated_by=command.updated_by,
            description=command.description,
        )
        saved = await self.repository.add(key_pair)
        key_pairs_generated_total.inc()
        logger.info("Generated key pair %s (%s)", saved.id, saved.label)
        return Ok(saved)

    @returns_result()
    async def get_by_id(self, key_id: str, redact: bool = True) -> Result[KeyPair]:
        """
        Get a key pair by ID.

        Args:
            key_id: Key pair identifier
            redact: Replace the private key with the redaction sentinel

        Returns:
            Ok(KeyPair) or Err(NOT_FOUND)
        """
        key_pair = await self.repository.find_by_id(key_id)
        if key_pair is None:
            raise NotFoundError(f"Key {key_id} not found")
        return Ok(self._present(key_pair, redact))

    @returns_result()
    async def list_keys(self, page: PageRequest, redact: bool = True) -> Result[Page[KeyPair]]:
        """
        List key pairs ordered by creation time.

        Args:
            page: Offset/limit window
            redact: Replace private keys with the redaction sentinel

        Returns:
            Ok(Page[KeyPair])
        """
        key_pairs = await self.repository.list(page)
        return Ok(Page.of(page, [self._present(key_pair, redact) for key_pair in key_pairs]))

    @returns_result()
    async def get_public_key_bytes(self, key_id: str) -> Result[bytes]:
        """Return the UTF-8 bytes of the stored public key PEM."""
        key_pair = await self.repository.find_by_id(key_id)
        if key_pair is None or _is_blank(key_pair.public_key):
            raise NotFoundError(f"Public key for {key_id} not found")
        return Ok(key_pair.public_key.encode("utf-8"))

    @returns_result()
    async def get_private_key_bytes(self, key_id: str) -> Result[bytes]:
        """
        Return the UTF-8 bytes of the stored private key PEM.

        Callers must not log or persist the returned bytes.
        """
        key_pair = await self.repository.find_by_id(key_id)
        if key_pair is None or _is_blank(key_pair.private_key):
            raise NotFoundError(f"Private key for {key_id} not found")
        return Ok(key_pair.private_key.encode("utf-8"))

    @returns_result("Key pair update failed")
    async def update_metadata(
        self, key_id: str, command: UpdateKeyPairCommand, redact: bool = True
    ) -> Result[KeyPair]:
        """
        Update label and description of a key pair.

        Args:
            key_id: Key pair identifier
            command: UpdateKeyPairCommand
            redact: Replace the private key in the returned value

        Returns:
            Ok(KeyPair) or Err(VALIDATION | NOT_FOUND | STORAGE)
        """
        if _is_blank(command.label) or _is_blank(command.updated_by):
            raise ValidationError("Invalid request body")

        existing = await self.repository.find_by_id(key_id)
        if existing is None:
            raise NotFoundError(f"Key {key_id} not found")

        updated = await self.repository.update_metadata(
            existing.with_metadata(
                label=command.label,
                description=command.description,
                updated_by=command.updated_by,
            )
        )
        if updated is None:
            raise NotFoundError(f"Key {key_id} not found")
        logger.info("Updated key pair %s", key_id)
        return Ok(self._present(updated, redact))

    @returns_result("Key pair deletion failed")
    async def delete(self, key_id: str) -> Result[KeyPair]:
        """
        Delete a key pair permanently.

        Licenses already signed with it are left untouched.

        Returns:
            Ok(KeyPair) with the private key redacted, or Err(NOT_FOUND)
        """
        deleted = await self.repository.delete(key_id)
        if deleted is None:
            raise NotFoundError(f"Key {key_id} not found")
        logger.info("Deleted key pair %s", key_id)
        return Ok(deleted.redacted())
