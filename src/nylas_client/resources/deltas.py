"""
Deltas resource.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from nylas_client.batch import HttpMethod, ResponseFormat, Task
from nylas_client.endpoints import endpoint
from nylas_client.resources.base import Resource
from nylas_client.schemas import DeltaParams, LongPollDeltaParams
from nylas_client.validation import validate

if TYPE_CHECKING:
    from collections.abc import Mapping


class Deltas(Resource):
    """Change feed for an account."""

    async def latest_cursor(self) -> Any:
        """Get the most recent cursor."""
        return await self._client.request(
            Task(
                HttpMethod.POST,
                endpoint("deltaLatestCursor"),
                headers=self._client.auth_headers(),
            )
        )

    async def get_set_of_deltas(self, params: Mapping[str, Any]) -> Any:
        """Get the deltas after a cursor."""
        return await self._get("delta", validate(DeltaParams, params))

    async def long_polling_delta(self, params: Mapping[str, Any]) -> Any:
        """Wait up to ``timeout`` seconds for deltas after a cursor."""
        return await self._get("deltaLongpoll", validate(LongPollDeltaParams, params))

    async def streaming_delta(self, params: Mapping[str, Any]) -> Any:
        """Read the streaming delta feed; returns the raw text body."""
        return await self._get(
            "deltaStreaming",
            validate(DeltaParams, params),
            response_format=ResponseFormat.TEXT,
        )

    async def _get(
        self,
        name: str,
        params: DeltaParams,
        response_format: ResponseFormat = ResponseFormat.JSON,
    ) -> Any:
        return await self._client.request(
            Task(
                HttpMethod.GET,
                endpoint(name),
                query=self._dump(params),
                headers=self._client.auth_headers(),
                response_format=response_format,
            )
        )
