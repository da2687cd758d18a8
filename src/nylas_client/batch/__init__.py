"""
Batch execution module for nylas-client.

Runs many independent requests with bounded concurrency and maps every
input identifier to the Outcome of its request.
"""

from nylas_client.batch.builder import (
    Batch,
    build_batch,
    ensure_unique,
    normalize_identifiers,
    normalize_items,
)
from nylas_client.batch.cancel import CancelReason, CancelToken
from nylas_client.batch.correlator import CorrelatedResult, correlate
from nylas_client.batch.executor import PoolExecutor
from nylas_client.batch.outcome import Cancelled, DecodeMode, Failure, Outcome, Success
from nylas_client.batch.request import RequestExecutor
from nylas_client.batch.runner import execute_batch, run_batch
from nylas_client.batch.task import HttpMethod, ResponseFormat, Task

__all__ = [
    "Batch",
    "CancelReason",
    "CancelToken",
    "Cancelled",
    "CorrelatedResult",
    "DecodeMode",
    "Failure",
    "HttpMethod",
    "Outcome",
    "PoolExecutor",
    "RequestExecutor",
    "ResponseFormat",
    "Success",
    "Task",
    "build_batch",
    "correlate",
    "ensure_unique",
    "execute_batch",
    "normalize_identifiers",
    "normalize_items",
    "run_batch",
]
