"""Expansion of measurements into the fields sent to Graphite.

Each measurement kind contributes an ordered list of fields. A field is
an optional attribute (None only for gauges, which are sent under their
bare name) and its formatted value. Disabled attributes are skipped
before their value is formatted, and values with no wire representation
are dropped.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from carbonpy.core.attributes import (
    RATE_ATTRIBUTES,
    SAMPLING_ATTRIBUTES,
    MetricAttribute,
)
from carbonpy.core.config import ReporterConfig
from carbonpy.core.formatting import format_float, format_integer, format_value
from carbonpy.core.models import (
    Counter,
    Gauge,
    Histogram,
    Measurement,
    Meter,
    Metered,
    Snapshot,
    Timer,
)


@dataclass(frozen=True)
class Field:
    """One value a measurement contributes to a report.

    Attributes:
        attribute: The statistical facet, or None for a gauge value.
        value: The formatted value.
    """

    attribute: MetricAttribute | None
    value: str

    @property
    def suffix(self) -> str | None:
        """Key suffix for this field, None when the key is the bare name."""
        return self.attribute.code if self.attribute is not None else None


def _count(
    attribute: MetricAttribute, count: int, config: ReporterConfig
) -> Iterator[Field]:
    if not config.is_disabled(attribute):
        yield Field(attribute, format_integer(count))


def _snapshot(
    snapshot: Snapshot, factor: float, config: ReporterConfig
) -> Iterator[Field]:
    for attribute, source in SAMPLING_ATTRIBUTES:
        if config.is_disabled(attribute):
            continue
        value = format_float(getattr(snapshot, source) * factor)
        if value is not None:
            yield Field(attribute, value)


def _metered(metered: Metered, config: ReporterConfig) -> Iterator[Field]:
    yield from _count(MetricAttribute.COUNT, metered.count, config)
    factor = config.rate_factor
    for attribute, source in RATE_ATTRIBUTES:
        if config.is_disabled(attribute):
            continue
        value = format_float(getattr(metered, source) * factor)
        if value is not None:
            yield Field(attribute, value)


def expand_gauge(gauge: Gauge, config: ReporterConfig) -> list[Field]:
    """Expand a gauge into at most one unlabeled field."""
    value = format_value(gauge.value)
    if value is None:
        return []
    return [Field(None, value)]


def expand_counter(counter: Counter, config: ReporterConfig) -> list[Field]:
    """Expand a counter into its COUNT field."""
    return list(_count(MetricAttribute.COUNT, counter.count, config))


def expand_histogram(histogram: Histogram, config: ReporterConfig) -> list[Field]:
    """Expand a histogram into COUNT followed by its unscaled snapshot."""
    fields = list(_count(MetricAttribute.COUNT, histogram.count, config))
    fields.extend(_snapshot(histogram.snapshot, 1.0, config))
    return fields


def expand_meter(meter: Meter, config: ReporterConfig) -> list[Field]:
    """Expand a meter into COUNT followed by its four scaled rates."""
    return list(_metered(meter, config))


def expand_timer(timer: Timer, config: ReporterConfig) -> list[Field]:
    """Expand a timer into its scaled snapshot followed by its metered half.

    The count is emitted once, with the metered fields.
    """
    fields = list(_snapshot(timer.snapshot, config.duration_factor, config))
    fields.extend(_metered(timer, config))
    return fields


def expand(measurement: Measurement, config: ReporterConfig) -> list[Field]:
    """Expand any measurement kind into its ordered fields.

    Raises:
        TypeError: If the measurement is not one of the five known kinds.
    """
    if isinstance(measurement, Gauge):
        return expand_gauge(measurement, config)
    if isinstance(measurement, Counter):
        return expand_counter(measurement, config)
    if isinstance(measurement, Histogram):
        return expand_histogram(measurement, config)
    if isinstance(measurement, Meter):
        return expand_meter(measurement, config)
    if isinstance(measurement, Timer):
        return expand_timer(measurement, config)
    raise TypeError(f"Unsupported measurement type: {type(measurement).__name__}")
