"""Fixtures for tests that talk to a real TCP listener."""

import socket
from collections.abc import Iterator

import pytest

from tests.integration.listeners import CarbonListener, ResettingListener


@pytest.fixture
def carbon_listener() -> Iterator[CarbonListener]:
    """Fixture providing a running loopback Carbon listener."""
    listener = CarbonListener()
    listener.start()
    yield listener
    listener.stop()


@pytest.fixture
def resetting_listener() -> Iterator[ResettingListener]:
    """Fixture providing a listener that resets the first connection."""
    listener = ResettingListener()
    listener.start()
    yield listener
    listener.stop()


@pytest.fixture
def unused_port() -> int:
    """A loopback port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return int(sock.getsockname()[1])
