"""Core types and errors."""

from triarb.core.exceptions import (
    CurrencyNotFoundError,
    InvalidRateError,
    StorageError,
    TriarbError,
)
from triarb.core.types import (
    ArbitrageOpportunity,
    ConversionRate,
    Currency,
    IconResolver,
    RateMatrix,
    RiskLevel,
    SortKey,
)


__all__ = [
    "ArbitrageOpportunity",
    "ConversionRate",
    "Currency",
    "CurrencyNotFoundError",
    "IconResolver",
    "InvalidRateError",
    "RateMatrix",
    "RiskLevel",
    "SortKey",
    "StorageError",
    "TriarbError",
]
