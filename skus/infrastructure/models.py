"""
Sku model.
"""
from django.db import models


class Sku(models.Model):
    """
    A product feature that licenses can grant.
    """

    code = models.CharField(primary_key=True, max_length=255)
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(max_length=20480, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "skus"
        ordering = ["code"]

    def __str__(self):
        return f"{self.name} ({self.code})"
