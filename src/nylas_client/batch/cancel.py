"""
Batch cancellation.

A cancelled batch admits no further Tasks; each Task it never started
gets a Cancelled outcome. Requests already in flight run to completion.
"""

from __future__ import annotations

import asyncio
from enum import Enum


class CancelReason(str, Enum):
    """Why a batch stopped admitting Tasks."""

    USER_REQUEST = "user_request"
    TIMEOUT = "timeout"
    SHUTDOWN = "shutdown"


class CancelToken:
    """Flag checked by the pool before admitting each Task.

    Example:
        >>> token = CancelToken(timeout=5.0)
        >>> result = await client.events.delete_event(items, cancel_token=token)
        >>> result.cancelled()  # ids not attempted before the deadline
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize the token.

        Args:
            timeout: Cancel with TIMEOUT after this many seconds. Requires
                a running event loop.
        """
        self._reason: CancelReason | None = None
        self._timer: asyncio.TimerHandle | None = None

        if timeout:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(timeout, self.cancel, CancelReason.TIMEOUT)

    def cancel(self, reason: CancelReason = CancelReason.USER_REQUEST) -> bool:
        """Stop admission of further Tasks.

        Returns:
            True if this call cancelled the token, False if it already was
        """
        if self._reason is not None:
            return False

        self._reason = reason
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return True

    @property
    def is_cancelled(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> CancelReason | None:
        return self._reason
