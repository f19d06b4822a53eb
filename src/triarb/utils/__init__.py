"""Utility functions for the discovery engine."""

from triarb.utils.math import (
    clamp,
    confidence_from_risk,
    format_amount,
    format_profit,
    is_near_integer,
    mean,
    population_variance,
    round_half_up,
)
from triarb.utils.time import (
    get_timestamp_ms,
    utc_now,
)


__all__ = [
    "clamp",
    "confidence_from_risk",
    "format_amount",
    "format_profit",
    "get_timestamp_ms",
    "is_near_integer",
    "mean",
    "population_variance",
    "round_half_up",
    "utc_now",
]
