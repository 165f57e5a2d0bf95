"""
Unit tests for KeyService.
"""

import asyncio

import pytest

from core.domain.pagination import PageRequest
from core.domain.result import ErrorKind
from keys.application.commands.generate_key_pair import GenerateKeyPairCommand
from keys.application.commands.update_key_pair import UpdateKeyPairCommand
from keys.domain import pem_codec
from keys.domain.key_pair import REDACTED


def _command(label="signing", created_by="alice", updated_by="alice"):
    return GenerateKeyPairCommand(label=label, created_by=created_by, updated_by=updated_by)


class TestGenerateKeyPair:
    """Tests for key pair generation."""

    @pytest.mark.asyncio
    async def test_generate_returns_unredacted_pair(self, key_service, key_repository):
        """Test generation stores and returns both halves."""
        result = await key_service.generate_key_pair(_command(label="primary"))

        assert result.is_ok
        key_pair = result.value
        assert key_pair.label == "primary"
        assert key_pair.private_key != REDACTED
        assert key_pair.created_at is not None
        assert key_pair.id in key_repository.rows

        private_key = pem_codec.decode_private_key(key_pair.private_key)
        public_key = pem_codec.decode_public_key(key_pair.public_key)
        assert private_key.key_size == 2048
        assert private_key.public_key().public_numbers() == public_key.public_numbers()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field",
        ["label", "created_by", "updated_by"],
    )
    async def test_blank_fields_rejected(self, key_service, key_repository, field):
        """Test blank required fields are a validation error."""
        result = await key_service.generate_key_pair(_command(**{field: "  "}))

        assert not result.is_ok
        assert result.kind is ErrorKind.VALIDATION
        assert result.message == "Invalid request body"
        assert key_repository.rows == {}


    @pytest.mark.asyncio
    async def test_generation_leaves_event_loop_responsive(self, key_service):
        """Test other coroutines keep running while a key is generated."""
        task = asyncio.ensure_future(key_service.generate_key_pair(_command()))
        ticks = 0
        while not task.done():
            ticks += 1
            await asyncio.sleep(0.001)

        assert task.result().is_ok
        assert ticks > 1


class TestReadKeyPair:
    """Tests for reading key pairs."""

    @pytest.mark.asyncio
    async def test_get_redacts_by_default(self, key_service):
        """Test get_by_id hides the private key unless asked not to."""
        created = (await key_service.generate_key_pair(_command())).value

        redacted = await key_service.get_by_id(created.id)
        full = await key_service.get_by_id(created.id, redact=False)

        assert redacted.value.private_key == REDACTED
        assert redacted.value.public_key == created.public_key
        assert redacted.value.created_at == created.created_at
        assert full.value.private_key == created.private_key

    @pytest.mark.asyncio
    async def test_get_missing_key(self, key_service):
        """Test unknown ids are NOT_FOUND."""
        result = await key_service.get_by_id("missing")

        assert result.kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_storage_failure_is_err(self, key_service, key_repository):
        """Test storage faults surface as STORAGE errors."""
        key_repository.fail_reads = True

        result = await key_service.get_by_id("any")

        assert result.kind is ErrorKind.STORAGE

    @pytest.mark.asyncio
    async def test_list_keys_in_creation_order(self, key_service):
        """Test list_keys pages oldest first."""
        ids = [(await key_service.generate_key_pair(_command(label=f"k{i}"))).value.id for i in range(3)]

        first = await key_service.list_keys(PageRequest(offset=0, limit=2))
        rest = await key_service.list_keys(PageRequest(offset=2, limit=2))

        assert [k.id for k in first.value.results] == ids[:2]
        assert [k.id for k in rest.value.results] == ids[2:]
        assert all(k.private_key == REDACTED for k in first.value.results)

    @pytest.mark.asyncio
    async def test_key_bytes(self, key_service):
        """Test raw public and private key bytes."""
        created = (await key_service.generate_key_pair(_command())).value

        public = await key_service.get_public_key_bytes(created.id)
        private = await key_service.get_private_key_bytes(created.id)

        assert public.value == created.public_key.encode("utf-8")
        assert private.value == created.private_key.encode("utf-8")

    @pytest.mark.asyncio
    async def test_key_bytes_missing(self, key_service):
        """Test key bytes for an unknown id are NOT_FOUND."""
        assert (await key_service.get_public_key_bytes("nope")).kind is ErrorKind.NOT_FOUND
        assert (await key_service.get_private_key_bytes("nope")).kind is ErrorKind.NOT_FOUND


class TestMutateKeyPair:
    """Tests for key pair updates and deletion."""

    @pytest.mark.asyncio
    async def test_update_keeps_key_material(self, key_service):
        """Test metadata updates never change key material."""
        created = (await key_service.generate_key_pair(_command())).value

        result = await key_service.update_metadata(
            created.id,
            UpdateKeyPairCommand(label="renamed", updated_by="bob", description="rotated"),
            redact=False,
        )

        updated = result.value
        assert updated.label == "renamed"
        assert updated.updated_by == "bob"
        assert updated.description == "rotated"
        assert updated.private_key == created.private_key
        assert updated.public_key == created.public_key
        assert updated.created_by == created.created_by
        assert updated.updated_at > created.updated_at

    @pytest.mark.asyncio
    async def test_update_missing_key(self, key_service):
        """Test updating an unknown key is NOT_FOUND."""
        result = await key_service.update_metadata("nope", UpdateKeyPairCommand(label="x", updated_by="bob"))

        assert result.kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_update_blank_label(self, key_service):
        """Test a blank label is a validation error."""
        created = (await key_service.generate_key_pair(_command())).value

        result = await key_service.update_metadata(created.id, UpdateKeyPairCommand(label="", updated_by="bob"))

        assert result.kind is ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_delete(self, key_service):
        """Test delete returns the redacted key and removes it."""
        created = (await key_service.generate_key_pair(_command())).value

        deleted = await key_service.delete(created.id)

        assert deleted.value.id == created.id
        assert deleted.value.private_key == REDACTED
        assert (await key_service.get_by_id(created.id)).kind is ErrorKind.NOT_FOUND
        assert (await key_service.delete(created.id)).kind is ErrorKind.NOT_FOUND
