"""
Outcome: the tagged result of executing one Task.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from nylas_client.batch.cancel import CancelReason
    from nylas_client.errors import NylasError


class DecodeMode(str, Enum):
    """How failures and undecodable bodies are surfaced.

    STRICT classifies error responses into structured ApiErrors and turns
    undecodable bodies into DecodeError failures. PASS_THROUGH_RAW leaves
    error responses unclassified with their raw text, and hands undecodable
    success bodies back unmodified.
    """

    STRICT = "strict"
    PASS_THROUGH_RAW = "pass_through_raw"


@dataclass(frozen=True)
class Success:
    """Task completed with a 2xx response.

    Attributes:
        payload: Decoded response body (raw text in pass-through mode
            when the body could not be decoded)
        status: HTTP status code
    """

    payload: Any = None
    status: int = 200

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Task failed.

    Attributes:
        error: Structured error (TransportError, ApiError, DecodeError, ...)
        status: HTTP status code, None when no response was received
        body: Response body, decoded when possible
    """

    error: NylasError
    status: int | None = None
    body: Any = None

    @property
    def is_success(self) -> bool:
        return False


@dataclass(frozen=True)
class Cancelled:
    """Task was never admitted because its batch was cancelled."""

    reason: CancelReason

    @property
    def is_success(self) -> bool:
        return False


Outcome = Union[Success, Failure, Cancelled]
