"""Persistence for currencies and rates."""

from triarb.storage.models import CurrencyRecord, RateRecord
from triarb.storage.store import (
    CurrencyRepository,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
)


__all__ = [
    "CurrencyRecord",
    "CurrencyRepository",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "RateRecord",
]
