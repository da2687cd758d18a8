"""错误基类：提供分层错误体系和结构化错误上下文。

Base error classes for nylas-client.

Provides a layered error hierarchy:
- NylasError: Base class for all library errors
- ValidationError: Malformed caller input, raised before any request
- TransportError: Network-level failure for one request
- ApiError: Non-success status returned by the API
- DecodeError: Response body did not match the expected format
- ContractViolation: Internal invariant broken (a bug, never a runtime condition)
- ClientRuntimeError: Unexpected failure while executing one request
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from nylas_client.errors.classification import ErrorClass


@dataclass
class ErrorContext:
    """Structured error context for diagnostics."""

    field_path: str | None = None
    """Path to the problematic field (e.g., '[1].id')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    source: str | None = None
    """Error source (e.g., 'validation', 'transport', 'api')"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.field_path:
            parts.append(f"at '{self.field_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class NylasError(Exception):
    """Base class for all nylas-client errors.

    Attributes:
        message: Human-readable error message
        context: Structured error context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message


class ValidationError(NylasError):
    """Caller input failed validation.

    Raised synchronously, before any Task is built or any request is sent.
    Never retried.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        field: str | None = None,
        expected: Any = None,
        actual: Any = None,
    ) -> None:
        ctx = context or ErrorContext(source="validation")
        if field:
            ctx.field_path = field
        if expected is not None:
            ctx.details["expected"] = expected
        if actual is not None:
            ctx.details["actual"] = actual
        super().__init__(message, ctx)
        self.field = field
        self.expected = expected
        self.actual = actual


class TransportError(NylasError):
    """Error during HTTP transport.

    Captured into the Failure outcome of the Task that hit it when:
    - Connection is refused
    - Request times out
    - SSL/TLS handshake fails
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        url: str | None = None,
        timed_out: bool = False,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="transport")
        if url:
            ctx.details["url"] = url
        if timed_out:
            ctx.details["timed_out"] = True
        super().__init__(message, ctx)
        self.url = url
        self.timed_out = timed_out
        self.__cause__ = cause


class ApiError(NylasError):
    """Non-success response from the API.

    Attributes:
        status_code: HTTP status code
        error_class: Standardized error classification (None when unclassified)
        retryable: Whether the error is retryable
        raw_error: Response body, decoded when possible, raw text otherwise
        request_id: Request ID reported by the server, if any
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_class: ErrorClass | None = None,
        retryable: bool = False,
        raw_error: Any = None,
        request_id: str | None = None,
    ) -> None:
        ctx = ErrorContext(source="api")
        ctx.details["status_code"] = status_code
        if error_class is not None:
            ctx.details["error_class"] = error_class.value
            ctx.details["retryable"] = retryable
        if request_id:
            ctx.details["request_id"] = request_id

        super().__init__(message, ctx)

        self.status_code = status_code
        self.error_class = error_class
        self.retryable = retryable
        self.raw_error = raw_error
        self.request_id = request_id

    @property
    def is_classified(self) -> bool:
        """Check whether the error was classified."""
        return self.error_class is not None

    @classmethod
    def from_response(
        cls,
        status_code: int,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> ApiError:
        """Create a classified ApiError from an HTTP response.

        Args:
            status_code: HTTP status code
            body: Response body (parsed JSON)
            headers: Response headers

        Returns:
            ApiError with appropriate classification
        """
        from nylas_client.errors.classification import (
            classify_http_error,
            extract_error_message,
            is_retryable,
        )

        error_class = classify_http_error(status_code, body)
        message = extract_error_message(body) or f"HTTP {status_code}"

        request_id = None
        if headers:
            request_id = (
                headers.get("x-request-id")
                or headers.get("X-Request-Id")
                or headers.get("nylas-request-id")
            )
        if body and "request_id" in body:
            with contextlib.suppress(TypeError):
                request_id = str(body["request_id"])

        return cls(
            message=message,
            status_code=status_code,
            error_class=error_class,
            retryable=is_retryable(error_class),
            raw_error=body,
            request_id=request_id,
        )

    @classmethod
    def unclassified(cls, status_code: int, text: str) -> ApiError:
        """Create an ApiError that carries the raw response text untouched."""
        return cls(
            message=f"HTTP {status_code}",
            status_code=status_code,
            raw_error=text,
        )


class DecodeError(NylasError):
    """Response body could not be decoded into the expected format."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        body: str | None = None,
        expected: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="decode")
        if expected:
            ctx.details["expected"] = expected
        super().__init__(message, ctx)
        self.body = body
        self.expected = expected


class ContractViolation(NylasError):
    """Internal invariant was broken.

    Indicates a bug in batch construction or execution. Always fatal.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="contract")
        super().__init__(message, ctx)


class ClientRuntimeError(NylasError):
    """Unexpected runtime failure while executing a single request."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="runtime")
        super().__init__(message, ctx)
        self.__cause__ = cause
