"""
REST endpoint table.

Templates contain at most one ``%s`` slot, filled with a Task's path parameter.
"""

from __future__ import annotations

DEFAULT_SERVER = "https://api.nylas.com"

ENDPOINTS: dict[str, str] = {
    # Threads
    "searchThreads": "/threads/search",
    # Events
    "events": "/events",
    "oneEvent": "/events/%s",
    "RSVPing": "/send-rsvp",
    # Deltas
    "delta": "/delta",
    "deltaLongpoll": "/delta/longpoll",
    "deltaStreaming": "/delta/streaming",
    "deltaLatestCursor": "/delta/latest_cursor",
}


def endpoint(name: str) -> str:
    """Look up an endpoint template by name.

    Raises:
        KeyError: If the endpoint is unknown
    """
    return ENDPOINTS[name]
