"""
Customer model.
"""
import uuid

from django.db import models


def _new_customer_id() -> str:
    return str(uuid.uuid4())


class Customer(models.Model):
    """
    A customer that licenses can be issued to.
    """

    id = models.CharField(primary_key=True, max_length=255, default=_new_customer_id)
    name = models.CharField(max_length=255)
    description = models.TextField(max_length=20480, null=True, blank=True)
    is_visible = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "customers"
        ordering = ["name"]

    def __str__(self):
        return self.name
