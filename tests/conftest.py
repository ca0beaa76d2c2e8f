"""Shared test fixtures for all test modules."""

import time
from collections.abc import Callable

import pytest

from carbonpy.adapters.registry.in_memory import InMemoryMetricRegistry
from carbonpy.adapters.senders.in_memory import InMemoryGraphiteSender

FROZEN_TIME = 1702300000.0


class FailingGraphiteSender(InMemoryGraphiteSender):
    """In-memory sender that fails lifecycle calls on demand.

    Args:
        connect_error: Raised by connect() instead of connecting.
        send_error: Raised by send() once fail_after sends succeeded.
        fail_after: Number of sends that succeed before send_error.
        flush_error: Raised by flush() after recording the call.
        close_error: Raised by close() after disconnecting.
        failures: Initial value of the failure counter.
    """

    def __init__(
        self,
        connect_error: Exception | None = None,
        send_error: Exception | None = None,
        fail_after: int = 0,
        flush_error: Exception | None = None,
        close_error: Exception | None = None,
        failures: int = 0,
    ) -> None:
        super().__init__()
        self._connect_error = connect_error
        self._send_error = send_error
        self._fail_after = fail_after
        self._flush_error = flush_error
        self._close_error = close_error
        self._failures = failures

    def connect(self) -> None:
        if self._connect_error is not None:
            self._calls.append("connect")
            raise self._connect_error
        super().connect()

    def send(self, name: str, value: str, timestamp: int) -> None:
        if self._send_error is not None and len(self._samples) >= self._fail_after:
            self._calls.append("send")
            self._failures += 1
            raise self._send_error
        super().send(name, value, timestamp)

    def flush(self) -> None:
        super().flush()
        if self._flush_error is not None:
            raise self._flush_error

    def close(self) -> None:
        super().close()
        if self._close_error is not None:
            raise self._close_error


@pytest.fixture
def frozen_time(monkeypatch: pytest.MonkeyPatch) -> int:
    """Freeze time.time() and return the frozen Unix timestamp in seconds."""
    monkeypatch.setattr(time, "time", lambda: FROZEN_TIME)
    return int(FROZEN_TIME)


@pytest.fixture
def sender() -> InMemoryGraphiteSender:
    """Fixture providing a fresh recording sender."""
    return InMemoryGraphiteSender()


@pytest.fixture
def registry() -> InMemoryMetricRegistry:
    """Fixture providing an empty in-memory registry."""
    return InMemoryMetricRegistry()


@pytest.fixture
def failing_sender() -> Callable[..., FailingGraphiteSender]:
    """Factory fixture for senders that fail on chosen lifecycle calls.

    Usage:
        def test_something(failing_sender):
            sender = failing_sender(connect_error=ConnectionRefusedError())
    """

    def _make(**kwargs: object) -> FailingGraphiteSender:
        return FailingGraphiteSender(**kwargs)  # type: ignore[arg-type]

    return _make
