"""
Base class for API resources.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import BaseModel

    from nylas_client.client.core import NylasClient


class Resource:
    """An API resource bound to a client."""

    def __init__(self, client: NylasClient) -> None:
        self._client = client

    @staticmethod
    def _dump(model: BaseModel, *, exclude: set[str] | None = None) -> dict[str, Any]:
        """Serialize validated params, dropping unset optional keys."""
        return model.model_dump(mode="json", exclude_none=True, exclude=exclude)
