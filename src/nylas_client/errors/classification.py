"""
Error classification for API responses.

Maps HTTP status codes and error bodies to standard error classes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorClass(str, Enum):
    """Standard error classification."""

    INVALID_REQUEST = "invalid_request"
    """Malformed request, invalid parameters, or unsupported operation."""

    AUTHENTICATION = "authentication"
    """Missing/invalid access token."""

    PERMISSION_DENIED = "permission_denied"
    """Token is valid but not permitted to access the resource."""

    PAYMENT_REQUIRED = "payment_required"
    """Account billing issue."""

    NOT_FOUND = "not_found"
    """Requested resource not found."""

    TIMEOUT = "timeout"
    """Request timed out or deadline exceeded."""

    CONFLICT = "conflict"
    """Request conflicts with the current state of the resource."""

    RATE_LIMITED = "rate_limited"
    """Throttled; typically retryable with backoff."""

    SERVER_ERROR = "server_error"
    """Transient server-side failure (5xx)."""

    OVERLOADED = "overloaded"
    """Service temporarily unavailable."""

    OTHER = "other"
    """Unknown classification."""


_RETRYABLE_CLASSES: set[ErrorClass] = {
    ErrorClass.RATE_LIMITED,
    ErrorClass.TIMEOUT,
    ErrorClass.CONFLICT,
    ErrorClass.SERVER_ERROR,
    ErrorClass.OVERLOADED,
}

_DEFAULT_STATUS_MAPPING: dict[int, ErrorClass] = {
    400: ErrorClass.INVALID_REQUEST,
    401: ErrorClass.AUTHENTICATION,
    402: ErrorClass.PAYMENT_REQUIRED,
    403: ErrorClass.PERMISSION_DENIED,
    404: ErrorClass.NOT_FOUND,
    408: ErrorClass.TIMEOUT,
    409: ErrorClass.CONFLICT,
    410: ErrorClass.NOT_FOUND,
    422: ErrorClass.INVALID_REQUEST,
    429: ErrorClass.RATE_LIMITED,
    500: ErrorClass.SERVER_ERROR,
    502: ErrorClass.SERVER_ERROR,
    503: ErrorClass.OVERLOADED,
    504: ErrorClass.TIMEOUT,
}

# Error "type" values the API places in its error envelope
_TYPE_MAPPING: dict[str, ErrorClass] = {
    "invalid_request_error": ErrorClass.INVALID_REQUEST,
    "api_error": ErrorClass.SERVER_ERROR,
    "rate_limit_error": ErrorClass.RATE_LIMITED,
    "authentication_error": ErrorClass.AUTHENTICATION,
}


def classify_http_error(
    status_code: int,
    body: dict[str, Any] | None = None,
) -> ErrorClass:
    """Classify an HTTP error into a standard error class.

    Args:
        status_code: HTTP status code
        body: Response body (parsed JSON)

    Returns:
        ErrorClass representing the error type
    """
    if status_code in _DEFAULT_STATUS_MAPPING:
        return _DEFAULT_STATUS_MAPPING[status_code]

    # Body type only matters for statuses without a fixed mapping
    if body and isinstance(body.get("type"), str):
        mapped = _TYPE_MAPPING.get(body["type"])
        if mapped is not None:
            return mapped

    if 400 <= status_code < 500:
        return ErrorClass.INVALID_REQUEST
    if 500 <= status_code < 600:
        return ErrorClass.SERVER_ERROR

    return ErrorClass.OTHER


def is_retryable(error_class: ErrorClass) -> bool:
    """Check if an error class is retryable by default."""
    return error_class in _RETRYABLE_CLASSES


def extract_error_message(body: dict[str, Any] | None) -> str | None:
    """Extract error message from response body.

    Supports:
    - API style: {"message": "...", "type": "..."}
    - Nested style: {"error": {"message": "..."}}
    - Detail style: {"detail": "..."}

    Args:
        body: Response body (parsed JSON)

    Returns:
        Error message if found, None otherwise
    """
    if not body:
        return None

    if "message" in body:
        msg = body["message"]
        if isinstance(msg, str):
            return msg

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            msg = error.get("message")
            if isinstance(msg, str):
                return msg
        elif isinstance(error, str):
            return error

    if "detail" in body:
        detail = body["detail"]
        if isinstance(detail, str):
            return detail
        if isinstance(detail, list) and detail:
            return str(detail[0])

    return None
