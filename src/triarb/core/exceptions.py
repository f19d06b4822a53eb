"""
Exception hierarchy.

The discovery engine itself never raises these; they guard the currency
book and the store, where user input enters the system.
"""


class TriarbError(Exception):
    """Base class for all package errors."""


class CurrencyNotFoundError(TriarbError, KeyError):
    """Raised when an operation references an unknown currency id."""

    def __init__(self, currency_id: str) -> None:
        super().__init__(currency_id)
        self.currency_id = currency_id

    def __str__(self) -> str:
        return f"Unknown currency: {self.currency_id}"


class InvalidRateError(TriarbError, ValueError):
    """Raised when a conversion rate fails validation."""


class StorageError(TriarbError):
    """Raised when the key-value store cannot be read from or written to disk."""
