"""
Django management command to create an internal API key.

The raw key is printed once and cannot be retrieved later.
"""
import asyncio

from django.core.management.base import BaseCommand, CommandError

from access.domain.internal_auth_key import InternalAuthKey
from access.infrastructure.repositories.django_internal_auth_key_repository import (
    DjangoInternalAuthKeyRepository,
)
from core.domain.exceptions import DomainException
from core.domain.value_objects import Role


class Command(BaseCommand):
    """Command to create an internal API key."""

    help = "Create an internal API key with the given role"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--role",
            type=str,
            default=Role.GENERAL.value,
            choices=[Role.GENERAL.value, Role.LICENSE_ADMIN.value, Role.ADMIN.value],
            help="Role granted to the key (default: general)",
        )
        parser.add_argument(
            "--created-by",
            type=str,
            default="manage.py",
            help="Actor recorded as creator",
        )
        parser.add_argument(
            "--description",
            type=str,
            default=None,
            help="Free text description",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        auth_key, raw_key = InternalAuthKey.create(
            role=Role.parse(options["role"]),
            created_by=options["created_by"],
            description=options["description"],
        )
        try:
            saved = asyncio.run(DjangoInternalAuthKeyRepository().add(auth_key))
        except DomainException as exc:
            raise CommandError(exc.message) from exc

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Created {saved.role} key {saved.id}"))
        self.stdout.write(self.style.SUCCESS(f"API key: {raw_key}"))
        self.stdout.write(self.style.WARNING("Save this API key - it cannot be retrieved later!"))
