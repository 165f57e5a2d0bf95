"""
Django admin configuration for keys app.
"""
from django.contrib import admin

from keys.infrastructure.models import KeyPair


@admin.register(KeyPair)
class KeyPairAdmin(admin.ModelAdmin):
    """Admin interface for KeyPair model. Private keys are never displayed."""

    list_display = ["label", "id", "created_by", "updated_by", "created_at"]
    list_filter = ["created_at", "updated_at"]
    search_fields = ["id", "label", "created_by"]
    readonly_fields = ["id", "public_key", "created_at", "updated_at"]
    exclude = ["private_key"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "label", "description", "created_by", "updated_by"),
            },
        ),
        (
            "Key Material",
            {
                "fields": ("public_key",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def has_add_permission(self, request):
        """Key pairs are only created through the key service."""
        return False
