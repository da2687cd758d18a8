"""HTTP 传输层：基于 httpx 的异步 HTTP 客户端，支持并发复用连接。

HTTP transport using httpx for async requests.

Provides:
- One pooled AsyncClient shared by every concurrent Task of a client
- Configurable timeouts and connection limits
- Automatic header management
"""

from __future__ import annotations

import importlib.util
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from nylas_client.errors import TransportError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from nylas_client.config import ClientOptions


_UA_VERSION: str | None = None


def _http2_enabled() -> bool:
    """Enable HTTP/2 only when optional dependency is present."""
    return importlib.util.find_spec("h2") is not None


def _get_ua_version() -> str:
    """Get package version for User-Agent (cached)."""
    global _UA_VERSION
    if _UA_VERSION is None:
        from importlib.metadata import PackageNotFoundError, version

        try:
            _UA_VERSION = version("nylas-client")
        except PackageNotFoundError:
            _UA_VERSION = "0.0.0"
    return _UA_VERSION


@dataclass(frozen=True)
class RawResponse:
    """Undecoded HTTP response.

    Attributes:
        status_code: HTTP status code
        text: Response body as text
        headers: Response headers (lower-cased names)
    """

    status_code: int
    text: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        """Check for a 2xx status."""
        return 200 <= self.status_code < 300


class HttpTransport:
    """HTTP transport for API communication.

    Safe for concurrent use: every request shares one httpx.AsyncClient
    and its connection pool.

    Example:
        >>> async with HttpTransport(options) as transport:
        ...     raw = await transport.request("GET", "/events/abc", headers=auth)
    """

    def __init__(
        self,
        options: ClientOptions,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HTTP transport.

        Args:
            options: Client options (server, timeouts, limits)
            transport: Custom httpx transport, mainly for tests
        """
        self._options = options
        self._base_url = options.server
        self._pool = options.pool_config()
        self._custom_transport = transport

        # Client instance (lazy initialization)
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        """Server base URL."""
        return self._base_url

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            kwargs: dict[str, Any] = {
                "base_url": self._base_url,
                "timeout": self._pool.to_httpx_timeout(),
                "limits": self._pool.to_httpx_limits(),
            }
            if self._custom_transport is not None:
                kwargs["transport"] = self._custom_transport
            else:
                kwargs["http2"] = _http2_enabled()

            self._client = httpx.AsyncClient(**kwargs)

        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_headers(self, extra_headers: Mapping[str, str] | None = None) -> dict[str, str]:
        """Build request headers."""
        headers = {
            "Accept": "application/json",
            "User-Agent": f"nylas-client-python/{_get_ua_version()}",
        }
        if extra_headers:
            headers.update(extra_headers)
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        """Make an HTTP request.

        Args:
            method: HTTP method
            path: Request path (relative to base URL)
            params: Query parameters
            headers: Additional headers
            json: JSON body

        Returns:
            Raw response; non-2xx statuses are returned, not raised

        Raises:
            TransportError: On network/connection errors and timeouts
        """
        client = self._get_client()
        url = f"{self._base_url}{path}"

        try:
            response = await client.request(
                method=method,
                url=path,
                params=dict(params) if params else None,
                headers=self._build_headers(headers),
                json=dict(json) if json is not None else None,
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Request timed out: {e}", url=url, timed_out=True, cause=e
            ) from e
        except httpx.ConnectError as e:
            raise TransportError(f"Connection failed: {e}", url=url, cause=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}", url=url, cause=e) from e

        return RawResponse(
            status_code=response.status_code,
            text=response.text,
            headers={k.lower(): v for k, v in response.headers.items()},
        )

    async def __aenter__(self) -> HttpTransport:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
