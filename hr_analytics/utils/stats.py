# hr_analytics/utils/stats.py
"""
Shared numeric helpers used by every calculator.

Rounding is half-up on the decimal representation of the value, so that
2.675 rounds to 2.68 rather than the binary-float 2.67. Every helper maps
NaN/Infinity to 0.0 instead of propagating it.
"""

import logging
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

Number = Union[int, float, np.number]

# Standard precisions
MONEY_PLACES = 2
PCT_PLACES = 2
YEARS_PLACES = 1

__all__ = [
    "MONEY_PLACES",
    "PCT_PLACES",
    "YEARS_PLACES",
    "is_finite",
    "finite_or_zero",
    "to_float",
    "round_half_up",
    "safe_divide",
    "percentage",
    "mean",
    "median",
]


def is_finite(value) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def finite_or_zero(value, label: Optional[str] = None) -> float:
    """Return ``value`` as a float, or 0.0 when it is NaN/Infinity.

    When ``label`` is given the coercion is logged as a warning.
    """
    if is_finite(value):
        return float(value)
    if label is not None:
        logger.warning(f"Non-finite value for '{label}' ({value!r}) coerced to 0")
    return 0.0


def to_float(value, default: float = 0.0) -> float:
    """Lenient numeric coercion: None, blanks and unparseable strings give ``default``."""
    if value is None:
        return default
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def round_half_up(value, places: int = MONEY_PLACES) -> float:
    """Round to ``places`` decimals with ROUND_HALF_UP; non-finite gives 0.0."""
    if not is_finite(value):
        return 0.0
    quantum = Decimal(1).scaleb(-places)
    try:
        rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return 0.0
    result = float(rounded)
    # Normalise -0.0
    return result + 0.0 if result != 0 else 0.0


def safe_divide(numerator, denominator, default: float = 0.0) -> float:
    """Divide, returning ``default`` for a zero/non-finite denominator or result."""
    if not is_finite(numerator) or not is_finite(denominator):
        return default
    denominator = float(denominator)
    if denominator == 0:
        return default
    result = float(numerator) / denominator
    return result if math.isfinite(result) else default


def percentage(part, whole) -> float:
    """``part / whole * 100``; 0.0 when ``whole`` is 0."""
    return safe_divide(part, whole) * 100


def mean(values: Iterable[Number]) -> float:
    """Arithmetic mean of the finite values; 0.0 for an empty sequence."""
    arr = np.asarray([float(v) for v in values if is_finite(v)], dtype=float)
    if arr.size == 0:
        return 0.0
    return finite_or_zero(arr.mean())


def median(values: Iterable[Number]) -> float:
    """Median of the finite values; 0.0 for an empty sequence.

    Odd length gives the middle sorted element, even length the average of the
    two middle elements.
    """
    arr = np.sort(np.asarray([float(v) for v in values if is_finite(v)], dtype=float))
    n = arr.size
    if n == 0:
        return 0.0
    middle = n // 2
    if n % 2 == 0:
        return finite_or_zero((arr[middle - 1] + arr[middle]) / 2)
    return float(arr[middle])
