"""
Observability middleware.

Adds correlation ids, structured request logs, Prometheus HTTP metrics
and trace headers to every request.
"""

import logging
import re
import time
import uuid
from typing import Callable, Optional, Tuple

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

from core.metrics import http_request_duration_seconds, http_requests_total

logger = logging.getLogger(__name__)

_UUID_SEGMENT = re.compile(r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")


def _endpoint_label(path: str) -> str:
    """Collapse identifiers in a path so metric labels stay bounded."""
    return _UUID_SEGMENT.sub("/{id}", path)


def _trace_context() -> Tuple[Optional[str], Optional[str]]:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None, None
    return format_trace_id(span_context.trace_id), format_span_id(span_context.span_id)


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    This middleware:
    1. Generates correlation IDs for request tracing
    2. Logs request/response information
    3. Records request count and duration metrics
    4. Adds correlation ID to response headers
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and add observability.

        Args:
            request: HTTP request

        Returns:
            HTTP response with observability headers
        """
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore

        trace_id, span_id = _trace_context()
        endpoint = _endpoint_label(request.path)
        start_time = time.time()

        log_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "remote_addr": request.META.get("REMOTE_ADDR"),
        }
        if trace_id:
            log_extra["trace_id"] = trace_id
            log_extra["span_id"] = span_id
        logger.info("Request started", extra=log_extra)

        try:
            response = self.get_response(request)
        except Exception as e:
            self._record(request.method, endpoint, 500, time.time() - start_time)
            logger.error(
                "Request failed",
                extra={
                    **log_extra,
                    "request_status": "exception",
                    "error_type": type(e).__name__,
                    "duration_ms": round((time.time() - start_time) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        duration = time.time() - start_time
        self._record(request.method, endpoint, response.status_code, duration)
        request_status = self._get_request_status(response)
        self._log_response(request, response, log_extra, request_status, duration)

        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Status"] = request_status
        response["X-Request-Duration"] = f"{duration:.3f}"
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    @staticmethod
    def _record(method: str, endpoint: str, status_code: int, duration: float) -> None:
        http_requests_total.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

    def _get_request_status(self, response: HttpResponse) -> str:
        """Determine request status based on status code."""
        if response.status_code >= 500:
            return "server_error"
        if response.status_code >= 400:
            return "client_error"
        return "success"

    def _log_response(self, request, response, log_extra, status, duration):
        """Log structured response information."""
        extra = {
            **log_extra,
            "request_status": status,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
        }
        role = getattr(request, "auth_role", None)
        if role is not None:
            extra["auth_role"] = str(role)

        if response.status_code >= 500:
            logger.error("Request completed with server error", extra=extra)
        elif response.status_code >= 400:
            logger.warning("Request completed with client error", extra=extra)
        else:
            logger.info("Request completed successfully", extra=extra)
