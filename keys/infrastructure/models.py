"""
KeyPair model.
"""
import uuid

from django.db import models


def _new_key_id() -> str:
    return str(uuid.uuid4())


class KeyPair(models.Model):
    """
    An RSA key pair used to sign license tokens.
    The private key never leaves this table except through the key service.
    """

    id = models.CharField(primary_key=True, max_length=255, default=_new_key_id, editable=False)
    label = models.CharField(max_length=255)
    created_by = models.CharField(max_length=255)
    updated_by = models.CharField(max_length=255)
    private_key = models.TextField(max_length=20480)
    public_key = models.TextField(max_length=20480)
    description = models.TextField(max_length=20480, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "keys"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["created_at"]),
        ]

    def __str__(self):
        return f"{self.label} ({self.id})"
