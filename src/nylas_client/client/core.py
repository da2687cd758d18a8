"""核心客户端实现：绑定传输层、默认并发度与解码模式。

Core NylasClient implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from nylas_client.batch import (
    Failure,
    RequestExecutor,
    execute_batch,
    run_batch,
)
from nylas_client.config import ClientOptions
from nylas_client.resources import Deltas, Events, Threads
from nylas_client.telemetry import LogLevel, NylasLogger, get_logger
from nylas_client.transport import HttpTransport
from nylas_client.validation import require_token

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterable

    import httpx

    from nylas_client.batch import (
        Batch,
        CancelToken,
        CorrelatedResult,
        DecodeMode,
        Task,
    )
    from nylas_client.client.builder import NylasClientBuilder

logger = get_logger(__name__)


class NylasClient:
    """Async client for the Nylas REST API.

    Holds the process-wide configuration (server, credentials, timeouts,
    default concurrency and decode mode) and one shared transport.

    Example:
        >>> async with NylasClient.create(access_token="...") as client:
        ...     result = await client.events.delete_event([{"id": "a"}, {"id": "b"}])
        ...     for event_id, outcome in result.items():
        ...         print(event_id, outcome.is_success)

        >>> # Any per-item operation
        >>> result = await client.run_batch(
        ...     ["a", "b", "c"],
        ...     lambda event_id: Task(HttpMethod.GET, "/events/%s", event_id,
        ...                           headers=client.auth_headers()),
        ...     concurrency=2,
        ... )
    """

    def __init__(
        self,
        options: ClientOptions | None = None,
        *,
        transport: HttpTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            options: Client options (read from NYLAS_* environment variables if omitted)
            transport: Transport override
        """
        self._options = options or ClientOptions.from_env()

        if self._options.debug:
            NylasLogger.configure(
                level=LogLevel.DEBUG,
                format="text",
                log_file=self._options.log_file,
            )

        self._transport = transport or HttpTransport(self._options)
        self._executor = RequestExecutor(
            self._transport,
            decode_mode=self._options.decode_mode,
            timeout=self._options.timeout,
        )

        self.events = Events(self)
        self.deltas = Deltas(self)
        self.threads = Threads(self)

    @classmethod
    def create(
        cls,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
        **options: Any,
    ) -> NylasClient:
        """Create a client from keyword options.

        Args:
            http_transport: Custom httpx transport, mainly for tests
            **options: ClientOptions fields

        Raises:
            ValidationError: If an option is invalid
        """
        client_options = ClientOptions.create(**options)
        transport = None
        if http_transport is not None:
            transport = HttpTransport(client_options, transport=http_transport)
        return cls(client_options, transport=transport)

    @classmethod
    def builder(cls) -> NylasClientBuilder:
        """Get a builder for fluent configuration."""
        from nylas_client.client.builder import NylasClientBuilder

        return NylasClientBuilder()

    @property
    def options(self) -> ClientOptions:
        """Get the client options."""
        return self._options

    @property
    def server(self) -> str:
        """Get the server base URL."""
        return self._options.server

    def auth_headers(self) -> dict[str, str]:
        """Build the Authorization header from the configured access token.

        Raises:
            ValidationError: If no access token is configured
        """
        token = require_token(self._options.access_token)
        return {"Authorization": f"Bearer {token}"}

    def _executor_for(self, decode_mode: DecodeMode | None) -> RequestExecutor:
        if decode_mode is None:
            return self._executor
        return self._executor.with_decode_mode(decode_mode)

    async def request(self, task: Task, *, decode_mode: DecodeMode | None = None) -> Any:
        """Execute one Task and return its payload.

        Args:
            task: Task to execute
            decode_mode: Override the client's default decode mode

        Returns:
            Decoded payload

        Raises:
            TransportError: On network failure
            ApiError: On a non-success response
            DecodeError: On a malformed body in strict mode
        """
        outcome = await self._executor_for(decode_mode).execute(task)
        if isinstance(outcome, Failure):
            raise outcome.error
        return outcome.payload

    async def run_batch(
        self,
        identifiers: Iterable[Hashable] | Hashable,
        task_builder: Callable[[Any], Task],
        *,
        concurrency: int | None = None,
        decode_mode: DecodeMode | None = None,
        cancel_token: CancelToken | None = None,
        on_progress: Callable[[int, int], None] | None = None,
    ) -> CorrelatedResult[Any]:
        """Run one Task per identifier and map each identifier to its Outcome.

        Individual failures never raise; inspect each Outcome instead.

        Args:
            identifiers: One identifier or an iterable of them, in admission
                order. A str or bytes value is a single identifier
            task_builder: Builds the Task for one identifier
            concurrency: Maximum requests in flight (client default if None)
            decode_mode: Override the client's default decode mode
            cancel_token: Stops admission of further Tasks once cancelled
            on_progress: Callback(completed, total) after each Task

        Returns:
            CorrelatedResult with exactly one entry per identifier

        Raises:
            ValidationError: On bad input, before any request is made
        """
        return await run_batch(
            identifiers,
            task_builder,
            self._executor_for(decode_mode),
            concurrency=self._options.max_concurrency if concurrency is None else concurrency,
            cancel_token=cancel_token,
            on_progress=on_progress,
        )

    async def execute_batch(
        self,
        batch: Batch[Any],
        *,
        concurrency: int | None = None,
        decode_mode: DecodeMode | None = None,
        cancel_token: CancelToken | None = None,
    ) -> CorrelatedResult[Any]:
        """Run a prebuilt Batch (see ``build_batch``)."""
        return await execute_batch(
            batch,
            self._executor_for(decode_mode),
            concurrency=self._options.max_concurrency if concurrency is None else concurrency,
            cancel_token=cancel_token,
        )

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> NylasClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
