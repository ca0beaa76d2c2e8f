"""Time units used to scale timer durations and meter rates."""

from enum import Enum


class TimeUnit(Enum):
    """A unit of time, valued by its length in nanoseconds."""

    NANOSECONDS = 1
    MICROSECONDS = 1_000
    MILLISECONDS = 1_000_000
    SECONDS = 1_000_000_000
    MINUTES = 60 * 1_000_000_000
    HOURS = 60 * 60 * 1_000_000_000
    DAYS = 24 * 60 * 60 * 1_000_000_000

    @property
    def nanoseconds(self) -> int:
        """Length of one unit in nanoseconds."""
        return self.value

    @property
    def seconds(self) -> float:
        """Length of one unit in seconds."""
        return self.value / TimeUnit.SECONDS.value

    @property
    def label(self) -> str:
        """Plural lower-case name, e.g. "milliseconds"."""
        return self.name.lower()

    @property
    def singular_label(self) -> str:
        """Lower-case name without the plural "s", e.g. "second"."""
        label = self.label
        return label[:-1] if label.endswith("s") else label

    @classmethod
    def parse(cls, name: str) -> "TimeUnit":
        """Resolve a unit from its name, e.g. "milliseconds" or "SECONDS".

        The singular form ("second") is accepted too.

        Raises:
            ValueError: If the name matches no unit.
        """
        key = name.strip().upper()
        if not key.endswith("S"):
            key += "S"
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(unit.label for unit in cls)
            raise ValueError(
                f"Unknown time unit {name!r} (expected one of: {valid})"
            ) from None
