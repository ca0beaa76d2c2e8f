"""Core domain models for measurements and Graphite samples."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias, TypeGuard


@dataclass(frozen=True)
class Snapshot:
    """A statistical summary computed over a recorded distribution.

    Attributes:
        max: Largest recorded value.
        mean: Arithmetic mean.
        min: Smallest recorded value.
        stddev: Standard deviation.
        median: 50th percentile.
        p75: 75th percentile.
        p95: 95th percentile.
        p98: 98th percentile.
        p99: 99th percentile.
        p999: 99.9th percentile.
    """

    max: float = 0.0
    mean: float = 0.0
    min: float = 0.0
    stddev: float = 0.0
    median: float = 0.0
    p75: float = 0.0
    p95: float = 0.0
    p98: float = 0.0
    p99: float = 0.0
    p999: float = 0.0


@dataclass(frozen=True)
class Gauge:
    """An instantaneous value of any type.

    Only numeric and boolean values can be reported; anything else is
    skipped when the registry is reported.
    """

    value: object


@dataclass(frozen=True)
class Counter:
    """A monotonic integer count."""

    count: int


@dataclass(frozen=True)
class Histogram:
    """A distribution of values with its event count."""

    count: int
    snapshot: Snapshot = field(default_factory=Snapshot)


@dataclass(frozen=True)
class Meter:
    """An event count with exponentially-weighted per-second rates.

    Attributes:
        count: Number of events marked.
        m1_rate: One-minute moving average rate, events/second.
        m5_rate: Five-minute moving average rate, events/second.
        m15_rate: Fifteen-minute moving average rate, events/second.
        mean_rate: All-time mean rate, events/second.
    """

    count: int
    m1_rate: float = 0.0
    m5_rate: float = 0.0
    m15_rate: float = 0.0
    mean_rate: float = 0.0


@dataclass(frozen=True)
class Timer:
    """A meter of events combined with a distribution of their durations.

    Snapshot values are raw durations in nanoseconds; rates are per second.
    """

    count: int
    m1_rate: float = 0.0
    m5_rate: float = 0.0
    m15_rate: float = 0.0
    mean_rate: float = 0.0
    snapshot: Snapshot = field(default_factory=Snapshot)


Measurement: TypeAlias = Gauge | Counter | Histogram | Meter | Timer
Metered: TypeAlias = Meter | Timer
Sampling: TypeAlias = Histogram | Timer


def is_metered(measurement: Measurement) -> TypeGuard[Metered]:
    """Return True if the measurement carries a count and rates."""
    return isinstance(measurement, (Meter, Timer))


def is_sampling(measurement: Measurement) -> TypeGuard[Sampling]:
    """Return True if the measurement carries a statistical snapshot."""
    return isinstance(measurement, (Histogram, Timer))


class RegistryScope(Enum):
    """Well-known registry partitions."""

    BASE = "base"
    VENDOR = "vendor"
    APPLICATION = "application"


@dataclass(frozen=True)
class RegistrySnapshot:
    """The five measurement collections of one registry for one report.

    Attributes:
        gauges: Gauges by name.
        counters: Counters by name.
        histograms: Histograms by name.
        meters: Meters by name.
        timers: Timers by name.
    """

    gauges: Mapping[str, Gauge] = field(default_factory=dict)
    counters: Mapping[str, Counter] = field(default_factory=dict)
    histograms: Mapping[str, Histogram] = field(default_factory=dict)
    meters: Mapping[str, Meter] = field(default_factory=dict)
    timers: Mapping[str, Timer] = field(default_factory=dict)


@dataclass(frozen=True)
class GraphiteSample:
    """A single line of the Carbon plaintext protocol.

    Attributes:
        key: Dotted metric path (e.g. app.base.requests.count).
        value: Formatted value.
        timestamp: Unix timestamp in whole seconds.
    """

    key: str
    value: str
    timestamp: int

    def to_line(self) -> str:
        """Render the sample as a newline-terminated plaintext line."""
        return f"{self.key} {self.value} {self.timestamp}\n"


def metric_name(*components: str | None) -> str:
    """Join name components with dots, skipping empty ones.

    Example:
        >>> metric_name("", "base", "requests", "count")
        'base.requests.count'
    """
    return ".".join(part for part in components if part)
