from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

from apps.common.errors import CoreError

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "EMPTY_CART": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "INVALID_TRANSITION": status.HTTP_409_CONFLICT,
    "TOO_MANY_REQUESTS": status.HTTP_429_TOO_MANY_REQUESTS,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "SERVICE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _normalize_details(details: Any) -> Any:
    if isinstance(details, ValidationError):
        return as_serializer_error(details)
    if isinstance(details, Mapping):
        return dict(details)
    if isinstance(details, Exception):
        return {"type": details.__class__.__name__}
    return details


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
) -> Response:
    """
    Return a consistently structured error response for API endpoints.

    Args:
        code: Machine-readable error identifier.
        message: Human-readable explanation of the error.
        details: Optional context, e.g. validation errors or offending ids.
        http_status: Explicit HTTP status code to override the default mapping.
    """

    if not isinstance(code, str) or not code.strip():
        raise ValueError("error_response requires a non-empty string code")
    if not isinstance(message, str) or not message.strip():
        raise ValueError("error_response requires a non-empty string message")

    normalized_code = code.strip().upper()
    status_code = (
        int(http_status)
        if http_status is not None
        else ERROR_STATUS_MAP.get(normalized_code, DEFAULT_ERROR_STATUS)
    )
    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    payload: Dict[str, Any] = {
        "error": {
            "code": normalized_code,
            "message": message.strip(),
            "status": status_code,
        }
    }
    if details is not None:
        payload["error"]["details"] = _normalize_details(details)
    return Response(payload, status=status_code)


def core_error_response(exc: CoreError) -> Response:
    """Render a service-layer error. Server-side faults never leak details."""
    status_code = ERROR_STATUS_MAP.get(exc.code, DEFAULT_ERROR_STATUS)
    if status_code >= 500:
        return error_response(exc.code, "Something went wrong")
    return error_response(exc.code, exc.message, exc.details)
