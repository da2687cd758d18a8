"""
Single-request execution.

RequestExecutor runs one Task against the transport and converts every
result, including failures, into an Outcome.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any, Protocol

from nylas_client.batch.outcome import DecodeMode, Failure, Outcome, Success
from nylas_client.errors import (
    ApiError,
    ClientRuntimeError,
    DecodeError,
    TransportError,
)
from nylas_client.telemetry import get_logger
from nylas_client.transport.decode import ResponseDecoder

if TYPE_CHECKING:
    from collections.abc import Mapping

    from nylas_client.batch.task import Task
    from nylas_client.transport.http import RawResponse

logger = get_logger(__name__)


class Transport(Protocol):
    """What the executor needs from a transport."""

    @property
    def base_url(self) -> str: ...

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> RawResponse: ...


class RequestExecutor:
    """Executes one Task and returns its Outcome.

    Never raises past its boundary (asyncio cancellation excepted). The
    total time spent on one Task is capped by ``timeout`` on top of the
    transport's own per-phase timeouts.

    Example:
        >>> executor = RequestExecutor(transport, timeout=30.0)
        >>> outcome = await executor(task)
        >>> if outcome.is_success:
        ...     print(outcome.payload)
    """

    def __init__(
        self,
        transport: Transport,
        *,
        decode_mode: DecodeMode = DecodeMode.STRICT,
        timeout: float | None = None,
        decoder: ResponseDecoder | None = None,
    ) -> None:
        """Initialize request executor.

        Args:
            transport: Transport shared by all Tasks
            decode_mode: How failures and undecodable bodies are surfaced
            timeout: Total deadline per Task in seconds (None = transport only)
            decoder: Response decoder
        """
        self._transport = transport
        self._decode_mode = decode_mode
        self._timeout = timeout
        self._decoder = decoder or ResponseDecoder()

    @property
    def decode_mode(self) -> DecodeMode:
        """Get the decode mode."""
        return self._decode_mode

    def with_decode_mode(self, decode_mode: DecodeMode) -> RequestExecutor:
        """Return an executor sharing this transport with another decode mode."""
        if decode_mode is self._decode_mode:
            return self
        return RequestExecutor(
            self._transport,
            decode_mode=decode_mode,
            timeout=self._timeout,
            decoder=self._decoder,
        )

    async def __call__(self, task: Task) -> Outcome:
        return await self.execute(task)

    async def execute(self, task: Task) -> Outcome:
        """Execute one Task.

        Args:
            task: Task to execute

        Returns:
            Success or Failure outcome
        """
        start = time.perf_counter()
        try:
            raw = await self._send(task)
        except TransportError as e:
            outcome: Outcome = Failure(error=e)
        except Exception as e:
            outcome = Failure(
                error=ClientRuntimeError(f"Unexpected transport failure: {e}", cause=e)
            )
        else:
            outcome = self._to_outcome(task, raw)

        elapsed_ms = (time.perf_counter() - start) * 1000
        if isinstance(outcome, Failure):
            logger.warning(
                "Request failed",
                method=task.method.value,
                path=task.path,
                status=outcome.status,
                error=outcome.error.message,
                elapsed_ms=round(elapsed_ms, 2),
            )
        else:
            logger.debug(
                "Request completed",
                method=task.method.value,
                path=task.path,
                status=outcome.status,
                elapsed_ms=round(elapsed_ms, 2),
            )
        return outcome

    async def _send(self, task: Task) -> RawResponse:
        call = self._transport.request(
            task.method.value,
            task.path,
            params=task.query_params() or None,
            headers=task.headers,
            json=task.body,
        )
        if self._timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request exceeded {self._timeout}s deadline",
                url=task.url(self._transport.base_url),
                timed_out=True,
                cause=e,
            ) from e

    def _to_outcome(self, task: Task, raw: RawResponse) -> Outcome:
        raw_mode = self._decode_mode is DecodeMode.PASS_THROUGH_RAW

        if raw.is_success:
            try:
                payload = self._decoder.decode(raw.text, task.response_format)
            except DecodeError as e:
                if raw_mode:
                    return Success(payload=raw.text, status=raw.status_code)
                return Failure(error=e, status=raw.status_code, body=raw.text)
            return Success(payload=payload, status=raw.status_code)

        if raw_mode:
            return Failure(
                error=ApiError.unclassified(raw.status_code, raw.text),
                status=raw.status_code,
                body=raw.text,
            )

        body = self._decoder.try_decode_json(raw.text)
        error = ApiError.from_response(
            status_code=raw.status_code,
            body=body if isinstance(body, dict) else None,
            headers=raw.headers,
        )
        return Failure(
            error=error,
            status=raw.status_code,
            body=body if body is not None else raw.text,
        )
