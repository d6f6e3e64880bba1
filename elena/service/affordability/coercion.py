"""
Value coercion helpers for untyped request payloads.

Request bodies arrive as arbitrary JSON. Everything numeric goes through
``finite_or_none`` so the engine only ever sees a finite float or None.
"""

import math
from typing import Any, Optional


def finite_or_none(value: Any) -> Optional[float]:
    """
    Coerce a JSON value to a finite float.

    Args:
        value: Any JSON-decoded value (number, string, bool, None, ...)

    Returns:
        The value as a finite float, or None if it is absent, blank,
        non-numeric, boolean, NaN or infinite
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        # float() takes digit separators ("1_000"); JSON clients never send them
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    return number if math.isfinite(number) else None


def pick_first_text(*values: Any) -> Optional[str]:
    """Return the first candidate that is a non-blank string, stripped."""
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with .5 going up.

    Python's round() uses banker's rounding; money figures shown to users
    follow the schoolbook rule instead.
    """
    return int(math.floor(value + 0.5))


def round_to_step(value: float, step: int) -> int:
    """Round to the nearest multiple of ``step`` (half up)."""
    return round_half_up(value / step) * step
