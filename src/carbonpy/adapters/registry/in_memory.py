"""In-memory metric registry."""

import threading
from typing import TypeVar

from carbonpy.core.config import MetricFilter
from carbonpy.core.models import (
    Counter,
    Gauge,
    Histogram,
    Measurement,
    Meter,
    RegistrySnapshot,
    Timer,
)

M = TypeVar("M", Gauge, Counter, Histogram, Meter, Timer)


class InMemoryMetricRegistry:
    """In-memory implementation of MetricRegistryPort.

    Holds the latest value of each named measurement. Registering a name
    again replaces its measurement, even with one of a different kind.
    Every read returns a new name-sorted dict, so callers never see later
    updates through a mapping they already hold.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._measurements: dict[str, Measurement] = {}

    def register(self, name: str, measurement: Measurement) -> None:
        """Store or replace the measurement under the given name.

        Raises:
            ValueError: If the name is empty.
            TypeError: If the measurement is not a known kind.
        """
        if not name:
            raise ValueError("metric name must not be empty")
        if not isinstance(measurement, (Gauge, Counter, Histogram, Meter, Timer)):
            raise TypeError(
                f"Unsupported measurement type: {type(measurement).__name__}"
            )
        with self._lock:
            self._measurements[name] = measurement

    def remove(self, name: str) -> bool:
        """Remove a measurement. Returns True if it was registered."""
        with self._lock:
            return self._measurements.pop(name, None) is not None

    def names(self) -> list[str]:
        """All registered names, sorted."""
        with self._lock:
            return sorted(self._measurements)

    def _select(self, kind: type[M], metric_filter: MetricFilter) -> dict[str, M]:
        with self._lock:
            items = sorted(self._measurements.items())
        return {
            name: measurement
            for name, measurement in items
            if isinstance(measurement, kind) and metric_filter(name, measurement)
        }

    def get_gauges(self, metric_filter: MetricFilter) -> dict[str, Gauge]:
        """Gauges accepted by the filter, sorted by name."""
        return self._select(Gauge, metric_filter)

    def get_counters(self, metric_filter: MetricFilter) -> dict[str, Counter]:
        """Counters accepted by the filter, sorted by name."""
        return self._select(Counter, metric_filter)

    def get_histograms(self, metric_filter: MetricFilter) -> dict[str, Histogram]:
        """Histograms accepted by the filter, sorted by name."""
        return self._select(Histogram, metric_filter)

    def get_meters(self, metric_filter: MetricFilter) -> dict[str, Meter]:
        """Meters accepted by the filter, sorted by name."""
        return self._select(Meter, metric_filter)

    def get_timers(self, metric_filter: MetricFilter) -> dict[str, Timer]:
        """Timers accepted by the filter, sorted by name."""
        return self._select(Timer, metric_filter)

    def snapshot(self, metric_filter: MetricFilter) -> RegistrySnapshot:
        """All five collections at once, as a RegistrySnapshot."""
        return RegistrySnapshot(
            gauges=self.get_gauges(metric_filter),
            counters=self.get_counters(metric_filter),
            histograms=self.get_histograms(metric_filter),
            meters=self.get_meters(metric_filter),
            timers=self.get_timers(metric_filter),
        )
