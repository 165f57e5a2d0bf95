"""
Django admin configuration for customers app.
"""
from django.contrib import admin

from customers.infrastructure.models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """Admin interface for Customer model."""

    list_display = ["name", "id", "is_visible", "created_at"]
    list_filter = ["is_visible", "created_at"]
    search_fields = ["id", "name"]
    readonly_fields = ["created_at", "updated_at"]
