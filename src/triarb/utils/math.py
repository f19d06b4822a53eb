"""
Mathematical utilities for rate and quantity calculations.

Small float helpers shared by the quantity normalizer, the risk scorer and
the display layer.
"""

import math
from collections.abc import Sequence

from triarb.config.constants import AMOUNT_DISPLAY_DECIMALS, MAX_CONFIDENCE


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties toward positive infinity.

    Python's built-in ``round`` uses banker's rounding, which would turn
    6517.5 into 6518 but 6516.5 into 6516.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return math.floor(value + 0.5)


def is_near_integer(value: float, tolerance: float) -> bool:
    """Check whether value lies strictly within tolerance of an integer."""
    return abs(value - round_half_up(value)) < tolerance


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def population_variance(values: Sequence[float]) -> float:
    """
    Population variance (divides by N, not N - 1).

    Args:
        values: Sample values.

    Returns:
        Mean squared deviation from the mean, 0.0 when empty.
    """
    if not values:
        return 0.0
    avg = mean(values)
    return sum((v - avg) ** 2 for v in values) / len(values)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into the closed interval [lower, upper]."""
    return max(lower, min(upper, value))


def confidence_from_risk(risk_score: float) -> float:
    """Confidence percentage: 100 - risk * 10, clamped to [0, 100]."""
    return clamp(MAX_CONFIDENCE - risk_score * 10, 0.0, MAX_CONFIDENCE)


def format_amount(amount: float, decimals: int = AMOUNT_DISPLAY_DECIMALS) -> str:
    """
    Format an amount with a fixed number of decimal places.

    Example:
        >>> format_amount(8.60310000001)
        '8.6031'
    """
    return f"{amount:.{decimals}f}"


def format_profit(profit_pct: float) -> str:
    """
    Format profit percentage for display.

    Args:
        profit_pct: Profit as percentage.

    Returns:
        Signed percentage string.
    """
    sign = "+" if profit_pct >= 0 else ""
    return f"{sign}{profit_pct:.2f}%"
