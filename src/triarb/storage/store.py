"""
Key-value persistence for the currency book.

Values are opaque JSON strings under fixed keys, mirroring browser
localStorage. The whole store lives in a single JSON document on disk.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

import orjson
from pydantic import TypeAdapter, ValidationError

from triarb.config.constants import STORAGE_KEY_CURRENCIES, STORAGE_KEY_RATES
from triarb.core.exceptions import StorageError
from triarb.core.types import ConversionRate, Currency
from triarb.market.book import CurrencyBook
from triarb.storage.models import CurrencyRecord, RateRecord


logger = logging.getLogger(__name__)

_currency_records = TypeAdapter(list[CurrencyRecord])
_rate_records = TypeAdapter(list[RateRecord])


class KeyValueStore(Protocol):
    """Protocol for string key-value stores."""

    def get(self, key: str) -> str | None:
        """Get the value for a key, None when absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        ...


class MemoryStore:
    """In-process store, used for tests and ephemeral sessions."""

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """
    Store persisted as one JSON object of ``key -> string`` on disk.

    The file is read lazily on first access and rewritten atomically on
    every change.
    """

    __slots__ = ("_path", "_data")

    def __init__(self, path: Path | str) -> None:
        """
        Initialize the store.

        Args:
            path: JSON file location; created on first write.
        """
        self._path = Path(path)
        self._data: dict[str, str] | None = None

    @property
    def path(self) -> Path:
        """Backing file path."""
        return self._path

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._flush(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._flush(data)

    def _load(self) -> dict[str, str]:
        """Read the backing file once; a corrupt file reads as empty."""
        if self._data is not None:
            return self._data

        # Cache only after a successful read
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            self._data = {}
            return self._data
        except OSError as e:
            raise StorageError(f"Cannot read store {self._path}: {e}") from e

        try:
            parsed = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            logger.warning(f"Ignoring corrupt store {self._path}: {e}")
            parsed = {}

        if not isinstance(parsed, dict):
            logger.warning(f"Ignoring store {self._path}: top level is not an object")
            parsed = {}

        self._data = {str(k): v for k, v in parsed.items() if isinstance(v, str)}
        return self._data

    def _flush(self, data: dict[str, str]) -> None:
        """Write the document via a temp file and rename."""
        payload = orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write store {self._path}: {e}") from e


class CurrencyRepository:
    """
    Loads and saves currencies and rates through a key-value store.

    Loading is fail-soft: a blob that is not a JSON list loads as empty,
    and individual records that fail validation are skipped, each with a
    warning, so a damaged store never prevents startup.
    """

    __slots__ = ("_store",)

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def _read_records(self, key: str) -> list[object]:
        """Raw records under a key; [] when missing or unparseable."""
        blob = self._store.get(key)
        if not blob:
            return []

        try:
            parsed = orjson.loads(blob)
        except orjson.JSONDecodeError as e:
            logger.warning(f"Discarding malformed {key}: {e}")
            return []

        if not isinstance(parsed, list):
            logger.warning(
                f"Discarding malformed {key}: expected a list, got {type(parsed).__name__}"
            )
            return []

        return parsed

    def save_currencies(self, currencies: list[Currency]) -> None:
        """Persist the full currency list."""
        records = [CurrencyRecord.from_domain(c) for c in currencies]
        self._store.set(
            STORAGE_KEY_CURRENCIES,
            _currency_records.dump_json(records, by_alias=True).decode(),
        )

    def load_currencies(self) -> list[Currency]:
        """Load currencies, skipping records that fail validation."""
        currencies: list[Currency] = []
        for index, raw in enumerate(self._read_records(STORAGE_KEY_CURRENCIES)):
            try:
                record = CurrencyRecord.model_validate(raw)
            except ValidationError as e:
                logger.warning(f"Skipping {STORAGE_KEY_CURRENCIES}[{index}]: {e}")
                continue
            currencies.append(record.to_domain())

        return currencies

    def save_rates(self, rates: list[ConversionRate]) -> None:
        """Persist the full rate list."""
        records = [RateRecord.from_domain(r) for r in rates]
        self._store.set(
            STORAGE_KEY_RATES,
            _rate_records.dump_json(records, by_alias=True).decode(),
        )

    def load_rates(self) -> list[ConversionRate]:
        """Load rates, skipping records that fail validation."""
        rates: list[ConversionRate] = []
        for index, raw in enumerate(self._read_records(STORAGE_KEY_RATES)):
            try:
                record = RateRecord.model_validate(raw)
            except ValidationError as e:
                logger.warning(f"Skipping {STORAGE_KEY_RATES}[{index}]: {e}")
                continue
            rates.append(record.to_domain())

        return rates

    def load_book(self) -> CurrencyBook:
        """
        Load a book from the store.

        Rates with invalid values are skipped by :meth:`load_rates`; rates
        referencing missing currencies or converting a currency to itself
        are dropped here. Each skip is logged as a warning.
        """
        currencies = self.load_currencies()
        known = {c.id for c in currencies}

        rates: list[ConversionRate] = []
        for rate in self.load_rates():
            if rate.from_currency_id not in known or rate.to_currency_id not in known:
                logger.warning(f"Dropping rate {rate!r}: unknown currency")
                continue
            if rate.from_currency_id == rate.to_currency_id:
                logger.warning(f"Dropping rate {rate!r}: self-conversion")
                continue
            rates.append(rate)

        return CurrencyBook(currencies, rates)

    def save_book(self, book: CurrencyBook) -> None:
        """Persist a book's currencies and rates."""
        self.save_currencies(book.currencies)
        self.save_rates(book.rates)
