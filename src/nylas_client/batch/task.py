"""
Task: an immutable description of one outbound request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from nylas_client.errors import ContractViolation
from nylas_client.transport.decode import ResponseFormat

if TYPE_CHECKING:
    from collections.abc import Mapping

_SLOT = "%s"


class HttpMethod(str, Enum):
    """HTTP verbs used by the API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Task:
    """One unit of outbound work.

    Attributes:
        method: HTTP verb
        endpoint_template: Endpoint path with at most one ``%s`` slot
        path_param: Value substituted into the slot
        query: Query parameters
        headers: Header parameters (must include Authorization)
        body: Request body for write operations
        response_format: Expected response body format
    """

    method: HttpMethod
    endpoint_template: str
    path_param: str | None = None
    query: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Mapping[str, Any] | None = None
    response_format: ResponseFormat = ResponseFormat.JSON

    def __post_init__(self) -> None:
        slots = self.endpoint_template.count(_SLOT)
        if slots > 1:
            raise ContractViolation(
                f"endpoint template has {slots} substitution slots: {self.endpoint_template}"
            )
        if (slots == 1) != (self.path_param is not None):
            raise ContractViolation(
                "path parameter must be given exactly when the endpoint has a slot: "
                f"{self.endpoint_template}"
            )
        if not any(name.lower() == "authorization" for name in self.headers):
            raise ContractViolation("task headers must include Authorization")

        # Freeze the mappings so a Task cannot change after construction
        object.__setattr__(self, "method", HttpMethod(self.method))
        object.__setattr__(self, "query", MappingProxyType(dict(self.query)))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        if self.body is not None:
            object.__setattr__(self, "body", MappingProxyType(dict(self.body)))

    @property
    def path(self) -> str:
        """Endpoint path with the path parameter substituted."""
        if self.path_param is None:
            return self.endpoint_template
        return self.endpoint_template.replace(_SLOT, quote(self.path_param, safe=""))

    def url(self, server: str) -> str:
        """Full URL against a server base."""
        return f"{server.rstrip('/')}{self.path}"

    def query_params(self) -> dict[str, str]:
        """Query parameters as wire strings."""
        return {key: _to_query_value(value) for key, value in self.query.items()}


def _to_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_to_query_value(v) for v in value)
    return str(value)
