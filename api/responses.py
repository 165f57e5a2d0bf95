"""
Helpers turning service results into DRF responses.
"""
from typing import Any, Callable, Optional

from rest_framework import status
from rest_framework.response import Response

from core.domain.result import Err, Result


def error_response(err: Err) -> Response:
    """Build the error payload for an Err; status comes from its kind."""
    return Response(
        {"error": {"code": err.kind.code, "message": err.message}},
        status=err.kind.http_status,
    )


def invalid_body_response(errors: Any) -> Response:
    """Build the error payload for a rejected request body."""
    return Response(
        {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request body",
                "details": errors,
            }
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def result_response(
    result: Result,
    serialize: Optional[Callable[[Any], Any]] = None,
    success_status: int = status.HTTP_200_OK,
) -> Response:
    """
    Convert a Result into a Response.

    Args:
        result: Ok or Err from a service
        serialize: Callable producing the response body from the Ok value
        success_status: Status used for Ok

    Returns:
        Response
    """
    if not result.is_ok:
        return error_response(result)
    body = serialize(result.value) if serialize else result.value
    return Response(body, status=success_status)
