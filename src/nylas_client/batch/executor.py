"""
Pool executor for bounded-concurrency batch execution.

Runs an ordered sequence of Tasks with at most ``max_concurrent`` in
flight and returns one Outcome per Task, in input order.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Generic, TypeVar

from nylas_client.batch.cancel import CancelReason
from nylas_client.batch.outcome import Cancelled, Failure, Outcome
from nylas_client.errors import ClientRuntimeError, ContractViolation, ValidationError
from nylas_client.telemetry import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterator, Sequence

    from nylas_client.batch.cancel import CancelToken

T = TypeVar("T")

logger = get_logger(__name__)


class PoolExecutor(Generic[T]):
    """Executes batches of Tasks concurrently.

    ``min(max_concurrent, N)`` workers pull ``(index, task)`` pairs from
    one shared iterator. A worker admits the next Task as soon as its
    previous one completes, so admission follows input order and a slow
    request never holds back the rest of the batch. Each worker writes
    only the result slot of the index it pulled.

    A failing Task never affects the others and never raises out of
    ``execute``.

    Example:
        >>> executor = PoolExecutor(request_executor, max_concurrent=5)
        >>> outcomes = await executor.execute(tasks)
        >>> [o.is_success for o in outcomes]
    """

    def __init__(
        self,
        operation: Callable[[T], Awaitable[Outcome]],
        max_concurrent: int = 10,
    ) -> None:
        """Initialize pool executor.

        Args:
            operation: Async function producing the Outcome of one Task
            max_concurrent: Maximum Tasks in flight

        Raises:
            ValidationError: If max_concurrent is below 1
        """
        valid = isinstance(max_concurrent, int) and not isinstance(max_concurrent, bool)
        if not valid or max_concurrent < 1:
            raise ValidationError(
                "concurrency must be a positive integer",
                field="concurrency",
                expected=">= 1",
                actual=max_concurrent,
            )
        self._operation = operation
        self._max_concurrent = max_concurrent
        self._in_flight = 0
        self._peak_in_flight = 0

    @property
    def max_concurrent(self) -> int:
        """Get maximum concurrent operations."""
        return self._max_concurrent

    @property
    def in_flight(self) -> int:
        """Get the number of Tasks currently executing."""
        return self._in_flight

    @property
    def peak_in_flight(self) -> int:
        """Get the highest number of simultaneously executing Tasks."""
        return self._peak_in_flight

    async def execute(
        self,
        tasks: Sequence[T],
        *,
        cancel_token: CancelToken | None = None,
        on_progress: Callable[[int, int], None] | None = None,
    ) -> list[Outcome]:
        """Execute all Tasks.

        Args:
            tasks: Tasks to run, in admission order
            cancel_token: Stops admission of further Tasks once cancelled
            on_progress: Callback(completed, total) after each Task; errors it
                raises are logged and ignored

        Returns:
            One Outcome per Task, at the Task's index

        Raises:
            ContractViolation: If a result slot is left unfilled
        """
        total = len(tasks)
        if total == 0:
            return []

        start_time = time.perf_counter()
        slots: list[Outcome | None] = [None] * total
        pending: Iterator[tuple[int, T]] = iter(enumerate(tasks))
        completed = 0

        async def worker() -> None:
            nonlocal completed
            for index, task in pending:
                if cancel_token is not None and cancel_token.is_cancelled:
                    slots[index] = Cancelled(
                        reason=cancel_token.reason or CancelReason.USER_REQUEST
                    )
                else:
                    slots[index] = await self._run_one(task)

                completed += 1
                if on_progress:
                    _report_progress(on_progress, completed, total)

        workers = min(self._max_concurrent, total)
        logger.debug("Batch started", size=total, workers=workers)

        await asyncio.gather(*(worker() for _ in range(workers)))

        outcomes: list[Outcome] = []
        for index, outcome in enumerate(slots):
            if outcome is None:
                raise ContractViolation(f"result slot {index} was never filled")
            outcomes.append(outcome)

        failed = sum(1 for o in outcomes if not o.is_success)
        logger.debug(
            "Batch finished",
            size=total,
            failed=failed,
            elapsed_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return outcomes

    async def _run_one(self, task: T) -> Outcome:
        """Run one Task, capturing any exception into a Failure."""
        self._in_flight += 1
        self._peak_in_flight = max(self._peak_in_flight, self._in_flight)
        try:
            return await self._operation(task)
        except Exception as e:
            logger.exception("Task raised instead of returning an outcome")
            return Failure(error=ClientRuntimeError(f"Task execution failed: {e}", cause=e))
        finally:
            self._in_flight -= 1


def _report_progress(
    on_progress: Callable[[int, int], None], completed: int, total: int
) -> None:
    try:
        on_progress(completed, total)
    except Exception:
        logger.exception("Progress callback failed", completed=completed, total=total)
