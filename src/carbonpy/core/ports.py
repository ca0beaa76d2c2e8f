"""Port interfaces for the reporter's collaborators.

These protocols define the contracts that registry and sender adapters
must implement. The reporter depends only on these interfaces, not on
concrete implementations.
"""

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from carbonpy.core.config import MetricFilter
from carbonpy.core.models import Counter, Gauge, Histogram, Meter, Timer


@runtime_checkable
class GraphiteSenderPort(Protocol):
    """Port for a Carbon plaintext connection.

    Adapters implementing this protocol deliver one line per send() call.
    Examples: GraphiteTCPSender, InMemoryGraphiteSender.

    connect(), send(), flush() and close() may raise OSError.
    """

    def connect(self) -> None:
        """Open the connection."""
        ...

    def send(self, name: str, value: str, timestamp: int) -> None:
        """Send one sample as ``name value timestamp``."""
        ...

    def flush(self) -> None:
        """Push buffered samples to the receiver."""
        ...

    def close(self) -> None:
        """Close the connection. Safe to call when not connected."""
        ...

    @property
    def is_connected(self) -> bool:
        """Whether connect() succeeded and close() has not been called."""
        ...

    @property
    def failures(self) -> int:
        """Cumulative number of failed deliveries. Never decreases."""
        ...


@runtime_checkable
class MetricRegistryPort(Protocol):
    """Port for reading the measurements of one registry.

    Every method returns a fresh mapping from name to measurement,
    restricted to entries accepted by metric_filter.
    """

    def get_gauges(self, metric_filter: MetricFilter) -> Mapping[str, Gauge]:
        """Gauges accepted by the filter."""
        ...

    def get_counters(self, metric_filter: MetricFilter) -> Mapping[str, Counter]:
        """Counters accepted by the filter."""
        ...

    def get_histograms(
        self, metric_filter: MetricFilter
    ) -> Mapping[str, Histogram]:
        """Histograms accepted by the filter."""
        ...

    def get_meters(self, metric_filter: MetricFilter) -> Mapping[str, Meter]:
        """Meters accepted by the filter."""
        ...

    def get_timers(self, metric_filter: MetricFilter) -> Mapping[str, Timer]:
        """Timers accepted by the filter."""
        ...
