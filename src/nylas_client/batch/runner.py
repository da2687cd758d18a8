"""
Batch runner: build, execute and correlate in one call.
"""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING, TypeVar

from nylas_client.batch.builder import Batch, ensure_unique, normalize_identifiers
from nylas_client.batch.correlator import CorrelatedResult, correlate
from nylas_client.batch.executor import PoolExecutor
from nylas_client.telemetry import bind_log_context, get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Hashable, Iterable

    from nylas_client.batch.cancel import CancelToken
    from nylas_client.batch.outcome import Outcome
    from nylas_client.batch.task import Task

K = TypeVar("K", bound="Hashable")

logger = get_logger(__name__)


async def run_batch(
    identifiers: Iterable[K] | K,
    task_builder: Callable[[K], Task],
    operation: Callable[[Task], Awaitable[Outcome]],
    *,
    concurrency: int = 10,
    cancel_token: CancelToken | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> CorrelatedResult[K]:
    """Run one Task per identifier and map every identifier to its Outcome.

    Args:
        identifiers: One identifier or an iterable of them, in admission
            order. A str or bytes value is a single identifier
        task_builder: Builds the Task for one identifier
        operation: Executes one Task (normally a RequestExecutor)
        concurrency: Maximum Tasks in flight
        cancel_token: Stops admission of further Tasks once cancelled
        on_progress: Callback(completed, total) after each Task; errors it
            raises are logged and ignored

    Returns:
        CorrelatedResult with exactly one entry per identifier

    Raises:
        ValidationError: On bad concurrency, unhashable or repeated
            identifiers, before any request is made
    """
    executor = PoolExecutor(operation, max_concurrent=concurrency)

    ids = normalize_identifiers(identifiers)
    ensure_unique(ids)
    batch = Batch(identifiers=tuple(ids), tasks=tuple(task_builder(i) for i in ids))

    return await _execute(batch, executor, cancel_token, on_progress)


async def execute_batch(
    batch: Batch[K],
    operation: Callable[[Task], Awaitable[Outcome]],
    *,
    concurrency: int = 10,
    cancel_token: CancelToken | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> CorrelatedResult[K]:
    """Run a prebuilt Batch and correlate its Outcomes."""
    executor = PoolExecutor(operation, max_concurrent=concurrency)
    return await _execute(batch, executor, cancel_token, on_progress)


async def _execute(
    batch: Batch[K],
    executor: PoolExecutor[Task],
    cancel_token: CancelToken | None,
    on_progress: Callable[[int, int], None] | None,
) -> CorrelatedResult[K]:
    if len(batch) == 0:
        return CorrelatedResult({})

    with bind_log_context(batch_id=uuid.uuid4().hex[:12]):
        start = time.perf_counter()
        outcomes = await executor.execute(
            batch.tasks, cancel_token=cancel_token, on_progress=on_progress
        )
        result = correlate(
            batch.identifiers,
            outcomes,
            total_time_ms=(time.perf_counter() - start) * 1000,
        )
        if result.all_successful:
            logger.debug("Batch succeeded", size=len(result))
        else:
            logger.info(
                "Batch completed with failures",
                size=len(result),
                failed=result.failed_count,
            )
    return result
