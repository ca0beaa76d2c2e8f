"""Reporter configuration."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from carbonpy.core.attributes import MetricAttribute
from carbonpy.core.models import Measurement
from carbonpy.core.units import TimeUnit

MetricFilter = Callable[[str, Measurement], bool]


def accept_all(name: str, measurement: Measurement) -> bool:
    """Metric filter that reports every measurement."""
    return True


def _to_attribute(item: MetricAttribute | str) -> MetricAttribute:
    if isinstance(item, MetricAttribute):
        return item
    if isinstance(item, str):
        return MetricAttribute.from_code(item)
    raise TypeError(f"Expected MetricAttribute or code string, got {item!r}")


def _to_attributes(items: object) -> frozenset[MetricAttribute]:
    if isinstance(items, str):
        items = [code for code in items.split(",") if code.strip()]
    if not isinstance(items, Iterable):
        raise TypeError("disabled_attributes must be a list or a string")
    return frozenset(_to_attribute(item) for item in items)


def _to_unit(item: TimeUnit | str) -> TimeUnit:
    if isinstance(item, TimeUnit):
        return item
    if isinstance(item, str):
        return TimeUnit.parse(item)
    raise TypeError(f"Expected TimeUnit or unit name, got {item!r}")


_MAPPING_KEYS = frozenset(
    {"prefix", "disabled_attributes", "duration_unit", "rate_unit"}
)


@dataclass(frozen=True)
class ReporterConfig:
    """Immutable settings for a GraphiteReporter.

    Attributes:
        prefix: Prepended to every metric key. Empty means no prefix.
        disabled_attributes: Attributes never sent for any measurement.
            Accepts any iterable of MetricAttribute members or their codes,
            or a comma-separated string of codes.
        duration_unit: Unit timer durations are reported in.
        rate_unit: Unit meter and timer rates are reported per.
        metric_filter: Predicate selecting which registry entries to report.
    """

    prefix: str = ""
    disabled_attributes: frozenset[MetricAttribute] = frozenset()
    duration_unit: TimeUnit = TimeUnit.MILLISECONDS
    rate_unit: TimeUnit = TimeUnit.SECONDS
    metric_filter: MetricFilter = field(default=accept_all, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.prefix, str):
            raise TypeError(f"prefix must be a string, got {self.prefix!r}")
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(
            self,
            "disabled_attributes",
            _to_attributes(self.disabled_attributes),
        )
        object.__setattr__(self, "duration_unit", _to_unit(self.duration_unit))
        object.__setattr__(self, "rate_unit", _to_unit(self.rate_unit))
        if not callable(self.metric_filter):
            raise TypeError("metric_filter must be callable")

    def is_disabled(self, attribute: MetricAttribute) -> bool:
        """Return True if the attribute must not be sent."""
        return attribute in self.disabled_attributes

    @property
    def duration_factor(self) -> float:
        """Multiplier turning raw nanosecond durations into duration_unit."""
        return 1.0 / self.duration_unit.nanoseconds

    @property
    def rate_factor(self) -> float:
        """Multiplier turning per-second rates into per-rate_unit rates."""
        return self.rate_unit.seconds

    @property
    def rate_unit_label(self) -> str:
        """Singular rate unit name for display, e.g. "second"."""
        return self.rate_unit.singular_label

    @property
    def duration_unit_label(self) -> str:
        """Duration unit name for display, e.g. "milliseconds"."""
        return self.duration_unit.label

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, object],
        metric_filter: MetricFilter = accept_all,
    ) -> "ReporterConfig":
        """Build a config from plain values, e.g. a parsed settings file.

        Args:
            data: May contain "prefix", "disabled_attributes" (a list of
                codes or a comma-separated string), "duration_unit" and
                "rate_unit" (unit names). A missing or null "prefix" means
                no prefix.
            metric_filter: Filter to install; not expressible as plain data.

        Raises:
            ValueError: On unknown keys, attribute codes or unit names.
            TypeError: If "prefix" is not a string.
        """
        unknown = set(data) - _MAPPING_KEYS
        if unknown:
            raise ValueError(f"Unknown reporter settings: {sorted(unknown)}")

        duration_unit: object = data.get("duration_unit", TimeUnit.MILLISECONDS)
        rate_unit: object = data.get("rate_unit", TimeUnit.SECONDS)
        prefix = data.get("prefix")
        return cls(
            prefix="" if prefix is None else prefix,  # type: ignore[arg-type]
            disabled_attributes=_to_attributes(data.get("disabled_attributes", ())),
            duration_unit=_to_unit(duration_unit),  # type: ignore[arg-type]
            rate_unit=_to_unit(rate_unit),  # type: ignore[arg-type]
            metric_filter=metric_filter,
        )
