"""In-memory sender that records samples instead of transmitting them."""

from carbonpy.core.models import GraphiteSample


class InMemoryGraphiteSender:
    """In-memory implementation of GraphiteSenderPort.

    Records every sample sent while connected, plus the sequence of
    lifecycle calls. Suitable for testing and dry runs where no Carbon
    receiver is available.
    """

    def __init__(self) -> None:
        self._samples: list[GraphiteSample] = []
        self._calls: list[str] = []
        self._connected = False
        self._failures = 0

    @property
    def samples(self) -> list[GraphiteSample]:
        """Samples sent so far, in send order."""
        return list(self._samples)

    @property
    def calls(self) -> list[str]:
        """Names of lifecycle methods called so far, in call order."""
        return list(self._calls)

    @property
    def is_connected(self) -> bool:
        """Whether connect() was called without a matching close()."""
        return self._connected

    @property
    def failures(self) -> int:
        """Number of sends attempted while disconnected."""
        return self._failures

    def connect(self) -> None:
        """Mark the sender connected."""
        self._calls.append("connect")
        if self._connected:
            raise RuntimeError("Already connected")
        self._connected = True

    def send(self, name: str, value: str, timestamp: int) -> None:
        """Record one sample.

        Raises:
            ConnectionError: If the sender is not connected.
        """
        self._calls.append("send")
        if not self._connected:
            self._failures += 1
            raise ConnectionError("Not connected to Graphite")
        self._samples.append(GraphiteSample(key=name, value=value, timestamp=timestamp))

    def flush(self) -> None:
        """Nothing is buffered; only the call is recorded."""
        self._calls.append("flush")

    def close(self) -> None:
        """Mark the sender disconnected."""
        self._calls.append("close")
        self._connected = False

    def lines(self) -> str:
        """Render all recorded samples in the plaintext wire format."""
        return "".join(sample.to_line() for sample in self._samples)

    def clear(self) -> None:
        """Forget recorded samples and calls. The failure count is kept."""
        self._samples.clear()
        self._calls.clear()
