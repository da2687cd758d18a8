"""错误体系：批量请求的结构化错误类型。

Error hierarchy for nylas-client.

Provides structured error types for validation, transport, API and
decoding failures.
"""

from nylas_client.errors.base import (
    ApiError,
    ClientRuntimeError,
    ContractViolation,
    DecodeError,
    ErrorContext,
    NylasError,
    TransportError,
    ValidationError,
)
from nylas_client.errors.classification import (
    ErrorClass,
    classify_http_error,
    extract_error_message,
    is_retryable,
)

__all__ = [
    "ApiError",
    "ClientRuntimeError",
    "ContractViolation",
    "DecodeError",
    # Classification
    "ErrorClass",
    "ErrorContext",
    # Base errors
    "NylasError",
    "TransportError",
    "ValidationError",
    "classify_http_error",
    "extract_error_message",
    "is_retryable",
]
