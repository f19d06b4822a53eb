"""
Currency book management.

Owns the user's currencies and directed rates, validates edits, and hands
immutable snapshots to the discovery engine.
"""

import dataclasses
import logging
import math
import secrets
import string
from collections.abc import Iterable, Sequence
from typing import Any

from triarb.config.constants import (
    CURRENCY_ID_PREFIX,
    CURRENCY_ID_SUFFIX_LENGTH,
    DEFAULT_PRECISION,
    MIN_PROFIT_PCT,
    OUTLIER_STDDEV_FACTOR,
)
from triarb.core.exceptions import CurrencyNotFoundError, InvalidRateError
from triarb.core.types import ArbitrageOpportunity, ConversionRate, Currency
from triarb.strategy.graph import find_arbitrage_opportunities
from triarb.utils.math import mean, population_variance
from triarb.utils.time import get_timestamp_ms, utc_now


logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_currency_id() -> str:
    """
    Generate a unique currency id.

    Format: ``currency_<unix ms>_<9 base36 chars>``.
    """
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(CURRENCY_ID_SUFFIX_LENGTH))
    return f"{CURRENCY_ID_PREFIX}_{get_timestamp_ms()}_{suffix}"


def find_rate_outliers(
    rates: Sequence[ConversionRate],
    factor: float = OUTLIER_STDDEV_FACTOR,
) -> list[ConversionRate]:
    """
    Flag rates far from the book's mean rate.

    A rate is an outlier when it lies more than ``factor`` population
    standard deviations from the mean of all rates.

    Args:
        rates: Rates to inspect.
        factor: Standard deviation multiplier.

    Returns:
        Outlying rates in input order.
    """
    if not rates:
        return []

    values = [r.rate for r in rates]
    avg = mean(values)
    std_dev = math.sqrt(population_variance(values))

    return [r for r in rates if abs(r.rate - avg) > std_dev * factor]


class CurrencyBook:
    """
    Mutable collection of currencies and their conversion rates.

    Responsibilities:
    - Adding, editing and removing currencies
    - Upserting rates, one per ordered pair
    - Cascading rate removal when a currency is deleted
    - Running the discovery engine over the current snapshot
    """

    __slots__ = ("_currencies", "_rates")

    def __init__(
        self,
        currencies: Iterable[Currency] = (),
        rates: Iterable[ConversionRate] = (),
    ) -> None:
        """
        Initialize the book.

        Args:
            currencies: Initial currencies, in display order.
            rates: Initial rates; later duplicates of a pair win.
        """
        self._currencies: dict[str, Currency] = {}
        self._rates: dict[tuple[str, str], ConversionRate] = {}

        for currency in currencies:
            self._currencies[currency.id] = currency
        for rate in rates:
            self._validate_rate(rate)
            self._rates[rate.pair] = rate

    # =========================================================================
    # Currencies
    # =========================================================================

    @property
    def currencies(self) -> list[Currency]:
        """Currencies in insertion order."""
        return list(self._currencies.values())

    def get_currency(self, currency_id: str) -> Currency:
        """Get a currency by id."""
        try:
            return self._currencies[currency_id]
        except KeyError:
            raise CurrencyNotFoundError(currency_id) from None

    def add_currency(
        self,
        name: str,
        icon: str = "",
        gold_cost_per_unit: float = 0.0,
        is_custom_icon: bool = False,
    ) -> Currency:
        """
        Create and add a currency with a generated id.

        Returns:
            The new currency.
        """
        currency = Currency(
            id=generate_currency_id(),
            name=name,
            icon=icon,
            gold_cost_per_unit=gold_cost_per_unit,
            is_custom_icon=is_custom_icon,
            created_at=utc_now(),
        )
        self._currencies[currency.id] = currency
        logger.info(f"Added currency {currency.name!r} ({currency.id})")
        return currency

    def update_currency(self, currency_id: str, **changes: Any) -> Currency:
        """
        Replace fields of an existing currency.

        ``id`` and ``created_at`` cannot be changed.

        Returns:
            The updated currency.
        """
        current = self.get_currency(currency_id)

        for frozen in ("id", "created_at"):
            if frozen in changes:
                raise ValueError(f"Field {frozen!r} cannot be updated")

        updated = dataclasses.replace(current, **changes)
        self._currencies[currency_id] = updated
        return updated

    def remove_currency(self, currency_id: str) -> int:
        """
        Delete a currency and every rate touching it.

        Returns:
            Number of rates removed with it.
        """
        self.get_currency(currency_id)
        del self._currencies[currency_id]

        stale = [pair for pair in self._rates if currency_id in pair]
        for pair in stale:
            del self._rates[pair]

        logger.info(f"Removed currency {currency_id} and {len(stale)} rates")
        return len(stale)

    # =========================================================================
    # Rates
    # =========================================================================

    @property
    def rates(self) -> list[ConversionRate]:
        """Rates in insertion order."""
        return list(self._rates.values())

    def find_rate(self, from_id: str, to_id: str) -> ConversionRate | None:
        """Get the rate for an ordered pair, if any."""
        return self._rates.get((from_id, to_id))

    def set_rate(self, from_id: str, to_id: str, rate: float) -> ConversionRate:
        """
        Insert or replace the rate for an ordered pair.

        Raises:
            InvalidRateError: For unknown currencies, self-conversions and
                non-positive or non-finite rates.
        """
        record = ConversionRate(
            from_currency_id=from_id,
            to_currency_id=to_id,
            rate=rate,
            last_updated=utc_now(),
        )
        self._validate_rate(record)
        self._rates[record.pair] = record
        return record

    def remove_rate(self, from_id: str, to_id: str) -> bool:
        """Delete a rate; returns False when none existed."""
        return self._rates.pop((from_id, to_id), None) is not None

    def replace_rates(self, rates: Iterable[ConversionRate]) -> None:
        """Swap the whole rate set after validating every record."""
        replacement: dict[tuple[str, str], ConversionRate] = {}
        for rate in rates:
            self._validate_rate(rate)
            replacement[rate.pair] = rate
        self._rates = replacement

    def rate_outliers(self) -> list[ConversionRate]:
        """Rates more than two standard deviations from the mean."""
        return find_rate_outliers(self.rates)

    def _validate_rate(self, rate: ConversionRate) -> None:
        """Reject rates the engine must never see."""
        if rate.from_currency_id == rate.to_currency_id:
            raise InvalidRateError(f"Rate {rate!r} converts a currency to itself")
        for currency_id in rate.pair:
            if currency_id not in self._currencies:
                raise InvalidRateError(f"Rate {rate!r} references unknown currency {currency_id}")
        if not math.isfinite(rate.rate) or rate.rate <= 0:
            raise InvalidRateError(f"Rate must be a positive number, got {rate.rate}")

    # =========================================================================
    # Discovery
    # =========================================================================

    def find_opportunities(
        self,
        precision: int = DEFAULT_PRECISION,
        min_profit_pct: float = MIN_PROFIT_PCT,
    ) -> list[ArbitrageOpportunity]:
        """Run the discovery engine over the current snapshot."""
        if len(self._currencies) < 3 or not self._rates:
            return []
        return find_arbitrage_opportunities(
            self.currencies, self.rates, precision, min_profit_pct
        )

    def name_of(self, currency_id: str) -> str:
        """Display name for a currency id, falling back to the id."""
        currency = self._currencies.get(currency_id)
        return currency.name if currency else currency_id

    def __len__(self) -> int:
        return len(self._currencies)

    def __contains__(self, currency_id: object) -> bool:
        return currency_id in self._currencies
