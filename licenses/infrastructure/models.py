"""
LicenseRecord model.
"""
from django.db import models


class LicenseRecord(models.Model):
    """
    An issued license token and its metadata.

    customer_id and key_id are soft references: no foreign keys, so a
    record outlives the customer or key it names.
    """

    id = models.CharField(primary_key=True, max_length=255, help_text="Token jti claim")
    label = models.CharField(max_length=255)
    issued_by = models.CharField(max_length=255)
    customer_id = models.CharField(max_length=255, db_index=True)
    token = models.TextField(max_length=20480)
    key_id = models.CharField(max_length=255, db_index=True)
    description = models.TextField(max_length=20480, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["customer_id", "created_at"]),
            models.Index(fields=["created_at"]),
        ]

    def __str__(self):
        return f"{self.label} ({self.id})"
