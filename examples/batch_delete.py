"""
Example: Deleting and fetching many events with bounded concurrency.

Key features:
- Multi-item delete in one call
- Max in-flight limit per batch
- Per-event outcomes, failures isolated
- Stopping a long batch with a cancel token

Run with NYLAS_ACCESS_TOKEN set and event ids as arguments.
"""

import asyncio
import sys

from nylas_client import (
    CancelToken,
    Cancelled,
    DecodeMode,
    Failure,
    HttpMethod,
    NylasClient,
    Success,
    Task,
)
from nylas_client.telemetry import LogLevel, NylasLogger


async def delete_events(client: NylasClient, event_ids: list[str]) -> None:
    """Delete events, at most three at a time, and report each result.

    Args:
        client: NylasClient instance
        event_ids: Events to delete
    """
    result = await client.events.delete_event(
        [{"id": event_id, "notify_participants": False} for event_id in event_ids],
        concurrency=3,
    )

    for event_id, outcome in result.items():
        if isinstance(outcome, Success):
            print(f"{event_id}: deleted")
        elif isinstance(outcome, Failure):
            print(f"{event_id}: failed ({outcome.status}) {outcome.error.message}")
        elif isinstance(outcome, Cancelled):
            print(f"{event_id}: not attempted ({outcome.reason.value})")

    print(f"{result.successful_count}/{len(result)} deleted in {result.total_time_ms:.0f}ms")


async def fetch_with_deadline(client: NylasClient, event_ids: list[str]) -> None:
    """Fetch events raw, admitting no new request after two seconds.

    Args:
        client: NylasClient instance
        event_ids: Events to fetch
    """
    headers = client.auth_headers()
    token = CancelToken(timeout=2.0)

    result = await client.run_batch(
        event_ids,
        lambda event_id: Task(HttpMethod.GET, "/events/%s", event_id, headers=headers),
        concurrency=5,
        decode_mode=DecodeMode.PASS_THROUGH_RAW,
        cancel_token=token,
    )

    print(f"fetched {len(result.succeeded())}, skipped {len(result.cancelled())}")


async def main() -> None:
    NylasLogger.configure(level=LogLevel.INFO)

    event_ids = sys.argv[1:]
    if not event_ids:
        print("usage: batch_delete.py EVENT_ID [EVENT_ID ...]")
        return

    async with NylasClient() as client:
        await fetch_with_deadline(client, event_ids)
        await delete_events(client, event_ids)


if __name__ == "__main__":
    asyncio.run(main())
