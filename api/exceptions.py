"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Any DomainException that escapes a view is mapped by its error kind.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import DomainException
from core.metrics import errors_total

logger = logging.getLogger(__name__)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)
    endpoint = _get_endpoint(context)

    if isinstance(exc, DomainException):
        errors_total.labels(error_type=exc.code, endpoint=endpoint).inc()
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        detail = response.data.get("detail", exc.default_detail) if isinstance(response.data, dict) else response.data
        response.data = {"error": {"code": code, "message": detail}}
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        errors_total.labels(error_type=type(exc).__name__, endpoint=endpoint).inc()
        response = _handle_unexpected_exception(exc, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _get_endpoint(context: Dict[str, Any]) -> str:
    view = context.get("view")
    return type(view).__name__ if view is not None else "unknown"


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = exc.kind.http_status
    if status_code >= 500:
        logger.error("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    else:
        logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response({"error": {"code": exc.code, "message": exc.message}}, status=status_code)


def _handle_unexpected_exception(exc: Exception, trace_id: Optional[str]) -> Response:
    """Handle unexpected exceptions. The payload never carries a stack trace."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
