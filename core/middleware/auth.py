"""
API key authentication middleware.

This middleware resolves the X-API-Key header of every /api/v1/
request to a role and attaches it to the request as auth_role.
Endpoint-level role checks are done by the API permission classes.
"""

import logging
from typing import Optional

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.domain.value_objects import Role

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1/"


class APIKeyAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for API key authentication.

    This middleware:
    1. Reads the API key from the X-API-Key header (or a Bearer token)
    2. Resolves it to a role through ApiKeyRoleResolver
    3. Returns 401 Unauthorized if the key is missing or unknown
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        request.auth_role = Role.NONE  # type: ignore
        if not request.path.startswith(API_PREFIX):
            return None

        header = getattr(settings, "API_KEY_HEADER", "X-API-Key")
        api_key = request.headers.get(header) or request.headers.get(
            "Authorization", ""
        ).replace("Bearer ", "")

        if not api_key:
            return JsonResponse(
                {"error": {"code": "UNAUTHORIZED", "message": f"Missing API key. Provide {header} header."}},
                status=401,
            )

        # Deferred import: services pull in models
        from api.v1.services import role_resolver

        role = async_to_sync(role_resolver().resolve)(api_key)
        if role is Role.NONE:
            logger.warning("Invalid API key attempted: %s...", api_key[:4])
            return JsonResponse(
                {"error": {"code": "UNAUTHORIZED", "message": "Invalid API key"}},
                status=401,
            )

        request.auth_role = role  # type: ignore
        return None
