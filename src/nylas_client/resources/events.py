"""
Events resource.

Multi-item calls (``get_event``, ``delete_event``) run as batches and
return a CorrelatedResult keyed by event id.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from nylas_client.batch import HttpMethod, Task, build_batch
from nylas_client.endpoints import endpoint
from nylas_client.resources.base import Resource
from nylas_client.schemas import (
    AddEventParams,
    DeleteEventParams,
    EventIdParams,
    EventListParams,
    RsvpParams,
    UpdateEventParams,
)
from nylas_client.validation import require_string, validate

if TYPE_CHECKING:
    from nylas_client.batch import CancelToken, CorrelatedResult, DecodeMode

_NOTIFY = "notify_participants"

EventParams = Mapping[str, Any] | Sequence[Mapping[str, Any]]


class Events(Resource):
    """Calendar events."""

    async def list_events(self, params: Mapping[str, Any] | None = None) -> Any:
        """List events matching the filters."""
        query = validate(EventListParams, params or {})
        headers = self._client.auth_headers()

        return await self._client.request(
            Task(
                HttpMethod.GET,
                endpoint("events"),
                query=self._dump(query),
                headers=headers,
            )
        )

    async def add_event(self, params: Mapping[str, Any]) -> Any:
        """Create an event. ``notify_participants`` is sent as a query flag."""
        event = validate(AddEventParams, params)
        headers = self._client.auth_headers()

        return await self._client.request(
            Task(
                HttpMethod.POST,
                endpoint("events"),
                query=_notify_query(event.notify_participants),
                headers=headers,
                body=self._dump(event, exclude={_NOTIFY}),
            )
        )

    async def update_event(self, params: Mapping[str, Any]) -> Any:
        """Update the event selected by ``id``."""
        event = validate(UpdateEventParams, params)
        headers = self._client.auth_headers()

        return await self._client.request(
            Task(
                HttpMethod.PUT,
                endpoint("oneEvent"),
                path_param=event.id,
                query=_notify_query(event.notify_participants),
                headers=headers,
                body=self._dump(event, exclude={"id", _NOTIFY}),
            )
        )

    async def rsvp(self, params: Mapping[str, Any]) -> Any:
        """Send an RSVP. ``account_id`` defaults to the client's account."""
        values = dict(params) if isinstance(params, Mapping) else params
        account_id = self._client.options.account_id
        if isinstance(values, dict) and account_id and "account_id" not in values:
            values["account_id"] = account_id

        reply = validate(RsvpParams, values)
        headers = self._client.auth_headers()

        return await self._client.request(
            Task(
                HttpMethod.POST,
                endpoint("RSVPing"),
                query=_notify_query(reply.notify_participants),
                headers=headers,
                body=self._dump(reply, exclude={_NOTIFY}),
            )
        )

    async def get_event(
        self,
        params: EventParams,
        *,
        concurrency: int | None = None,
        decode_mode: DecodeMode | None = None,
        cancel_token: CancelToken | None = None,
    ) -> CorrelatedResult[str]:
        """Fetch one or more events by id."""
        headers = self._client.auth_headers()
        batch = build_batch(
            params,
            schema=EventIdParams,
            identify=lambda item: item.id,
            make_task=lambda item: Task(
                HttpMethod.GET,
                endpoint("oneEvent"),
                path_param=item.id,
                headers=headers,
            ),
        )
        return await self._client.execute_batch(
            batch,
            concurrency=concurrency,
            decode_mode=decode_mode,
            cancel_token=cancel_token,
        )

    async def delete_event(
        self,
        params: EventParams,
        *,
        concurrency: int | None = None,
        decode_mode: DecodeMode | None = None,
        cancel_token: CancelToken | None = None,
    ) -> CorrelatedResult[str]:
        """Delete one or more events.

        Args:
            params: ``{"id": ..., "notify_participants": ...}`` or a list of them
            concurrency: Maximum deletes in flight
            decode_mode: Override the client's default decode mode
            cancel_token: Stops admission of further deletes once cancelled

        Returns:
            Outcome of each delete, keyed by event id
        """
        headers = self._client.auth_headers()
        batch = build_batch(
            params,
            schema=DeleteEventParams,
            identify=lambda item: item.id,
            make_task=lambda item: Task(
                HttpMethod.DELETE,
                endpoint("oneEvent"),
                path_param=item.id,
                query=_notify_query(item.notify_participants),
                headers=headers,
            ),
        )
        return await self._client.execute_batch(
            batch,
            concurrency=concurrency,
            decode_mode=decode_mode,
            cancel_token=cancel_token,
        )

    async def delete_event_by_id(
        self, event_id: str, notify_participants: bool = False
    ) -> CorrelatedResult[str]:
        """Delete a single event; a one-element ``delete_event`` batch."""
        require_string(event_id, "id")
        item: dict[str, Any] = {"id": event_id}
        if notify_participants:
            item[_NOTIFY] = True
        return await self.delete_event(item)


def _notify_query(notify: bool | None) -> dict[str, bool]:
    return {} if notify is None else {_NOTIFY: notify}
