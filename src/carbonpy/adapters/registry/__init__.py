"""Registry adapters implementing MetricRegistryPort."""

from carbonpy.adapters.registry.in_memory import InMemoryMetricRegistry

__all__ = [
    "InMemoryMetricRegistry",
]
