"""
Threads resource.
"""

from __future__ import annotations

from typing import Any

from nylas_client.batch import HttpMethod, Task
from nylas_client.endpoints import endpoint
from nylas_client.resources.base import Resource
from nylas_client.schemas import SearchParams
from nylas_client.validation import validate


class Threads(Resource):
    """Email threads."""

    async def search(self, q: str) -> Any:
        """Search threads."""
        params = validate(SearchParams, {"q": q})
        return await self._client.request(
            Task(
                HttpMethod.GET,
                endpoint("searchThreads"),
                query={"q": params.q},
                headers=self._client.auth_headers(),
            )
        )
