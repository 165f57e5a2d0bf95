"""
Role-based permission classes.

Roles are attached to the request by APIKeyAuthenticationMiddleware.
"""
from rest_framework.permissions import BasePermission

from core.domain.value_objects import Role


def request_role(request) -> Role:
    """Return the role resolved for this request."""
    return getattr(request, "auth_role", Role.NONE)


class HasApiRole(BasePermission):
    """Any resolved role: general, license-admin or admin."""

    message = "A valid API key is required"

    def has_permission(self, request, view):
        return request_role(request) is not Role.NONE


class IsElevatedRole(BasePermission):
    """license-admin or admin."""

    message = "This operation requires the license-admin or admin role"

    def has_permission(self, request, view):
        return request_role(request).is_elevated
