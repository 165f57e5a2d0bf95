"""
Django admin configuration for skus app.
"""
from django.contrib import admin

from skus.infrastructure.models import Sku


@admin.register(Sku)
class SkuAdmin(admin.ModelAdmin):
    """Admin interface for Sku model."""

    list_display = ["code", "name", "created_at"]
    list_filter = ["created_at", "updated_at"]
    search_fields = ["code", "name"]
    readonly_fields = ["created_at", "updated_at"]
    ordering = ["code"]
