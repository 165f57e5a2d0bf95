"""
Django admin configuration for access app.
"""
from django.contrib import admin

from access.infrastructure.models import InternalAuthKey


@admin.register(InternalAuthKey)
class InternalAuthKeyAdmin(admin.ModelAdmin):
    """Admin interface for InternalAuthKey model."""

    list_display = ["id", "role", "created_by", "created_at"]
    list_filter = ["role", "created_at"]
    search_fields = ["id", "created_by"]
    readonly_fields = ["id", "key_hash", "created_at", "updated_at"]

    def has_add_permission(self, request):
        """Keys are created with the create_auth_key command so the raw key can be shown."""
        return False
