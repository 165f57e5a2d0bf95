"""
InternalAuthKey model.
"""
import uuid

from django.db import models


def _new_auth_key_id() -> str:
    return str(uuid.uuid4())


class InternalAuthKey(models.Model):
    """
    An API key used by internal callers. Only the hash is stored.
    """

    ROLE_CHOICES = [
        ("general", "General"),
        ("license-admin", "License admin"),
        ("admin", "Admin"),
    ]

    id = models.CharField(primary_key=True, max_length=255, default=_new_auth_key_id, editable=False)
    key_hash = models.CharField(max_length=64, unique=True, db_index=True)
    role = models.CharField(max_length=32, choices=ROLE_CHOICES)
    created_by = models.CharField(max_length=255)
    description = models.TextField(max_length=20480, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "internal_auth_keys"
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.role} ({self.id})"
