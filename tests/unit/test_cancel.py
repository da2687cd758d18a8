"""Tests for cancel module."""

import asyncio

import pytest

from nylas_client.batch import CancelReason, CancelToken


class TestCancelToken:
    """Tests for CancelToken."""

    def test_initial_state(self) -> None:
        """Test initial token state."""
        token = CancelToken()
        assert token.is_cancelled is False
        assert token.reason is None

    def test_cancel(self) -> None:
        """Test cancellation."""
        token = CancelToken()
        result = token.cancel()

        assert result is True
        assert token.is_cancelled is True
        assert token.reason == CancelReason.USER_REQUEST

    def test_cancel_twice(self) -> None:
        """Test cancelling twice returns False and keeps the first reason."""
        token = CancelToken()
        first = token.cancel(CancelReason.SHUTDOWN)
        second = token.cancel(CancelReason.USER_REQUEST)

        assert first is True
        assert second is False
        assert token.reason == CancelReason.SHUTDOWN

    def test_reason_values(self) -> None:
        """Test reasons compare equal to their wire strings."""
        assert CancelReason.TIMEOUT == "timeout"
        assert CancelReason("shutdown") is CancelReason.SHUTDOWN

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Test a token cancels itself after its timeout."""
        token = CancelToken(timeout=0.01)
        assert token.is_cancelled is False

        await asyncio.sleep(0.05)

        assert token.reason == CancelReason.TIMEOUT

    @pytest.mark.asyncio
    async def test_manual_cancel_stops_timer(self) -> None:
        """Test an explicit cancel keeps its reason when the timer would fire."""
        token = CancelToken(timeout=0.01)
        token.cancel(CancelReason.SHUTDOWN)
        await asyncio.sleep(0.03)

        assert token.reason == CancelReason.SHUTDOWN
