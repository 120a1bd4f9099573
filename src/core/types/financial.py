"""
Numeric helpers for backtest statistics.

Stored documents are produced by an external tool and read back as plain
JSON, so every value arrives as a Python ``float``/``int`` (or occasionally
as numeric text). The helpers here coerce those values and keep every ratio
finite: a zero denominator resolves to ``ZERO`` rather than NaN or infinity.
"""

import math

# Common values as float constants
ZERO = 0.0
HUNDRED = 100.0


def to_float(value: object) -> float:
    """Convert a JSON scalar to float.

    Args:
        value: Number, numeric string or bool-free scalar

    Returns:
        Float representation of the value

    Raises:
        ValueError: If the value is not numeric, not finite or too large
            for a float

    Examples:
        >>> to_float(50)
        50.0
        >>> to_float('-12.5')
        -12.5
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a numeric value: {value!r}")
    try:
        result = value if isinstance(value, float) else float(value)  # type: ignore[arg-type]
    except OverflowError as e:
        raise ValueError("Numeric value out of float range") from e
    if not math.isfinite(result):
        raise ValueError(f"Not a finite value: {value!r}")
    return result


def try_float(value: object) -> float | None:
    """Convert a JSON scalar to float, returning None when it is not numeric."""
    try:
        return to_float(value)
    except (TypeError, ValueError):
        return None


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, resolving a zero or non-finite result to ZERO.

    Examples:
        >>> safe_divide(1.0, 4.0)
        0.25
        >>> safe_divide(1.0, 0.0)
        0.0
    """
    if denominator == ZERO:
        return ZERO
    result = numerator / denominator
    return result if math.isfinite(result) else ZERO


def percentage(part: float, whole: float) -> float:
    """Express part as a percentage of whole (ZERO when whole is zero)."""
    return safe_divide(part, whole) * HUNDRED
