"""
Builder for fluent client construction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from nylas_client.batch.outcome import DecodeMode

if TYPE_CHECKING:
    import httpx

    from nylas_client.client.core import NylasClient


class NylasClientBuilder:
    """Builder for creating NylasClient instances with custom configuration.

    Example:
        >>> client = (
        ...     NylasClientBuilder()
        ...     .access_token("...")
        ...     .max_concurrency(5)
        ...     .off_decode_error()
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        """Initialize the builder."""
        self._options: dict[str, Any] = {}
        self._http_transport: httpx.AsyncBaseTransport | None = None
        self._from_env = False

    def from_env(self, enable: bool = True) -> NylasClientBuilder:
        """Start from NYLAS_* environment variables.

        Values set on the builder take precedence.
        """
        self._from_env = enable
        return self

    def client_app(self, client_id: str, client_secret: str) -> NylasClientBuilder:
        """Set the application credentials."""
        self._options["client_id"] = client_id
        self._options["client_secret"] = client_secret
        return self

    def access_token(self, token: str) -> NylasClientBuilder:
        """Set the account access token."""
        self._options["access_token"] = token
        return self

    def account_id(self, account_id: str) -> NylasClientBuilder:
        """Set the account ID."""
        self._options["account_id"] = account_id
        return self

    def server(self, url: str) -> NylasClientBuilder:
        """Override the API base URL."""
        self._options["server"] = url
        return self

    def timeout(self, seconds: float) -> NylasClientBuilder:
        """Set the per-request timeout.

        Args:
            seconds: Timeout in seconds

        Returns:
            Self for chaining
        """
        self._options["timeout"] = seconds
        return self

    def max_concurrency(self, n: int) -> NylasClientBuilder:
        """Set the default number of requests in flight per batch.

        Args:
            n: Maximum concurrent requests

        Returns:
            Self for chaining
        """
        self._options["max_concurrency"] = n
        return self

    def decode_mode(self, mode: DecodeMode) -> NylasClientBuilder:
        """Set the default decode mode."""
        self._options["decode_mode"] = mode
        return self

    def off_decode_error(self, off: bool = True) -> NylasClientBuilder:
        """Pass undecodable bodies and error responses through raw."""
        self._options["decode_mode"] = (
            DecodeMode.PASS_THROUGH_RAW if off else DecodeMode.STRICT
        )
        return self

    def debug(self, enable: bool = True, log_file: str | None = None) -> NylasClientBuilder:
        """Enable debug logging, optionally appending to a file.

        Args:
            enable: Whether to enable debug logging
            log_file: File to append log records to

        Returns:
            Self for chaining
        """
        self._options["debug"] = enable
        if log_file is not None:
            self._options["log_file"] = log_file
        return self

    def http_transport(self, transport: httpx.AsyncBaseTransport) -> NylasClientBuilder:
        """Use a custom httpx transport."""
        self._http_transport = transport
        return self

    def build(self) -> NylasClient:
        """Build the NylasClient instance.

        Raises:
            ValidationError: If an option is invalid
        """
        from nylas_client.client.core import NylasClient
        from nylas_client.config import ClientOptions
        from nylas_client.transport import HttpTransport

        if self._from_env:
            options = ClientOptions.from_env(**self._options)
        else:
            options = ClientOptions.create(**self._options)

        transport = None
        if self._http_transport is not None:
            transport = HttpTransport(options, transport=self._http_transport)
        return NylasClient(options, transport=transport)
