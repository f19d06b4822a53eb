"""Configuration module for the discovery engine."""

from triarb.config.constants import (
    DEFAULT_PRECISION,
    INTEGER_TOLERANCE,
    MAX_PRECISION,
    MIN_PRECISION,
    MIN_PROFIT_PCT,
)
from triarb.config.settings import Settings, get_settings


__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_PRECISION",
    "INTEGER_TOLERANCE",
    "MAX_PRECISION",
    "MIN_PRECISION",
    "MIN_PROFIT_PCT",
]
