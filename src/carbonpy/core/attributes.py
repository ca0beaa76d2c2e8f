"""Statistical attributes a measurement can contribute to Graphite."""

from enum import Enum


class MetricAttribute(Enum):
    """One named statistical facet of a measurement.

    The value of each member is its wire code, appended as the last
    component of the Graphite key (e.g. ``app.base.latency.p99``).
    Codes are stable identifiers and must never change.
    """

    MAX = "max"
    MEAN = "mean"
    MIN = "min"
    STDDEV = "stddev"
    P50 = "p50"
    P75 = "p75"
    P95 = "p95"
    P98 = "p98"
    P99 = "p99"
    P999 = "p999"
    COUNT = "count"
    M1_RATE = "m1_rate"
    M5_RATE = "m5_rate"
    M15_RATE = "m15_rate"
    MEAN_RATE = "mean_rate"

    @property
    def code(self) -> str:
        """Canonical wire code for this attribute."""
        return self.value

    @classmethod
    def from_code(cls, code: str) -> "MetricAttribute":
        """Resolve an attribute from its wire code.

        Args:
            code: Attribute code (e.g. "p999"), case-insensitive.

        Returns:
            The matching MetricAttribute.

        Raises:
            ValueError: If no attribute has the given code.
        """
        try:
            return cls(code.strip().lower())
        except ValueError:
            valid = ", ".join(attr.code for attr in cls)
            raise ValueError(
                f"Unknown metric attribute {code!r} (expected one of: {valid})"
            ) from None


# Snapshot attributes in emission order, paired with the Snapshot field
# that feeds each one.
SAMPLING_ATTRIBUTES: tuple[tuple[MetricAttribute, str], ...] = (
    (MetricAttribute.MAX, "max"),
    (MetricAttribute.MEAN, "mean"),
    (MetricAttribute.MIN, "min"),
    (MetricAttribute.STDDEV, "stddev"),
    (MetricAttribute.P50, "median"),
    (MetricAttribute.P75, "p75"),
    (MetricAttribute.P95, "p95"),
    (MetricAttribute.P98, "p98"),
    (MetricAttribute.P99, "p99"),
    (MetricAttribute.P999, "p999"),
)

# Rate attributes in emission order, paired with the Metered field
# that feeds each one.
RATE_ATTRIBUTES: tuple[tuple[MetricAttribute, str], ...] = (
    (MetricAttribute.M1_RATE, "m1_rate"),
    (MetricAttribute.M5_RATE, "m5_rate"),
    (MetricAttribute.M15_RATE, "m15_rate"),
    (MetricAttribute.MEAN_RATE, "mean_rate"),
)
