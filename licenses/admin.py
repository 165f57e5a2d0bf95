"""
Django admin configuration for licenses app.
"""
from django.contrib import admin

from licenses.infrastructure.models import LicenseRecord


@admin.register(LicenseRecord)
class LicenseRecordAdmin(admin.ModelAdmin):
    """Admin interface for LicenseRecord model."""

    list_display = [
        "label",
        "id",
        "customer_id",
        "key_id",
        "issued_by",
        "created_at",
    ]
    list_filter = ["created_at", "issued_by"]
    search_fields = ["id", "label", "customer_id", "key_id"]
    readonly_fields = [
        "id",
        "customer_id",
        "key_id",
        "issued_by",
        "token",
        "created_at",
        "updated_at",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "label", "description", "issued_by"),
            },
        ),
        (
            "Binding",
            {
                "fields": ("customer_id", "key_id", "token"),
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
        """Licenses are only created through issuance."""
        return False
