"""Nylas API 异步 Python 客户端：带并发上限的批量请求执行。

nylas-client: Async Python client for the Nylas REST API.

Batch calls (multi-delete, multi-fetch, ...) run with bounded
concurrency and return one Outcome per input identifier.
"""
from __future__ import annotations

from nylas_client.batch import (
    Batch,
    Cancelled,
    CancelReason,
    CancelToken,
    CorrelatedResult,
    DecodeMode,
    Failure,
    HttpMethod,
    Outcome,
    ResponseFormat,
    Success,
    Task,
    build_batch,
)
from nylas_client.client import NylasClient, NylasClientBuilder
from nylas_client.config import ClientOptions
from nylas_client.errors import (
    ApiError,
    ContractViolation,
    DecodeError,
    NylasError,
    TransportError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ApiError",
    # Batch
    "Batch",
    "CancelReason",
    "CancelToken",
    "Cancelled",
    # Client
    "ClientOptions",
    "ContractViolation",
    "CorrelatedResult",
    "DecodeError",
    "DecodeMode",
    "Failure",
    "HttpMethod",
    "NylasClient",
    "NylasClientBuilder",
    "NylasError",
    "Outcome",
    "ResponseFormat",
    "Success",
    "Task",
    "TransportError",
    "ValidationError",
    "__version__",
    "build_batch",
]
