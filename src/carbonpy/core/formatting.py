"""Value formatting for the Carbon plaintext protocol.

The plaintext format is loosely specified; receivers expect plain
US-style digits. Formatting here never consults the host locale.
"""

import math
from decimal import Decimal
from numbers import Integral, Real


def format_integer(value: int) -> str:
    """Format an integer as a plain decimal string."""
    return str(int(value))


def format_float(value: float) -> str | None:
    """Format a float with exactly two decimal places.

    Rounding follows Python's format-spec rules on the exact binary value
    (correctly rounded, ties to even). Non-finite values have no wire
    representation.

    Returns:
        The formatted value, or None for NaN and infinities.
    """
    value = float(value)
    if not math.isfinite(value):
        return None
    return f"{value:.2f}"


def format_value(value: object) -> str | None:
    """Format an arbitrary gauge or statistic value for the wire.

    Args:
        value: A bool, integer-like, or real-like value. Anything else
            (strings, None, arbitrary objects) is not representable.

    Returns:
        The formatted text, or None when the value cannot be sent.
    """
    # bool is an Integral, so it has to be checked first
    if isinstance(value, bool):
        return format_integer(1 if value else 0)
    if isinstance(value, Integral):
        return format_integer(value)  # type: ignore[arg-type]
    if isinstance(value, (Real, Decimal)):
        return format_float(value)  # type: ignore[arg-type]
    return None
