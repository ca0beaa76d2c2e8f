"""carbonpy: report metric registries to Graphite over the plaintext protocol."""

from carbonpy.adapters.registry import InMemoryMetricRegistry
from carbonpy.adapters.senders import GraphiteTCPSender, InMemoryGraphiteSender
from carbonpy.core.attributes import MetricAttribute
from carbonpy.core.config import MetricFilter, ReporterConfig, accept_all
from carbonpy.core.expansion import Field, expand
from carbonpy.core.formatting import format_value
from carbonpy.core.logs import get_logger
from carbonpy.core.models import (
    Counter,
    Gauge,
    GraphiteSample,
    Histogram,
    Measurement,
    Meter,
    RegistryScope,
    RegistrySnapshot,
    Snapshot,
    Timer,
    is_metered,
    is_sampling,
    metric_name,
)
from carbonpy.core.ports import GraphiteSenderPort, MetricRegistryPort
from carbonpy.core.reporter import GraphiteReporter, iter_samples
from carbonpy.core.units import TimeUnit

__all__ = [
    # Measurements
    "Counter",
    "Gauge",
    "Histogram",
    "Measurement",
    "Meter",
    "Snapshot",
    "Timer",
    "is_metered",
    "is_sampling",
    # Reporting
    "Field",
    "GraphiteReporter",
    "GraphiteSample",
    "MetricAttribute",
    "MetricFilter",
    "RegistryScope",
    "RegistrySnapshot",
    "ReporterConfig",
    "TimeUnit",
    "accept_all",
    "expand",
    "format_value",
    "iter_samples",
    "metric_name",
    # Ports
    "GraphiteSenderPort",
    "MetricRegistryPort",
    # Adapters
    "GraphiteTCPSender",
    "InMemoryGraphiteSender",
    "InMemoryMetricRegistry",
    # Logging
    "get_logger",
]
