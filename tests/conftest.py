"""
Pytest configuration and shared fixtures.

Provides reusable test fixtures for all test modules.
"""

import os
from collections.abc import Callable, Iterator

import pytest

from triarb.config.settings import get_settings
from triarb.core.types import ArbitrageOpportunity, ConversionRate, Currency
from triarb.market.book import CurrencyBook
from triarb.storage.store import CurrencyRepository, MemoryStore

from tests.factories import CHAOS, CREATED_AT, DIVINE, EXALTED, make_rate


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from the cached settings and TRIARB_ environment."""
    for key in list(os.environ):
        if key.startswith("TRIARB_"):
            monkeypatch.delenv(key)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Currency Fixtures
# =============================================================================


@pytest.fixture
def currency_divine() -> Currency:
    """Divine Orb, 800 gold per unit."""
    return Currency(
        id=DIVINE,
        name="Divine Orb",
        icon="Divine Orb",
        gold_cost_per_unit=800.0,
        created_at=CREATED_AT,
    )


@pytest.fixture
def currency_exalted() -> Currency:
    """Exalted Orb, 120 gold per unit."""
    return Currency(
        id=EXALTED,
        name="Exalted Orb",
        icon="Exalted Orb",
        gold_cost_per_unit=120.0,
        created_at=CREATED_AT,
    )


@pytest.fixture
def currency_chaos() -> Currency:
    """Chaos Orb, 160 gold per unit."""
    return Currency(
        id=CHAOS,
        name="Chaos Orb",
        icon="Chaos Orb",
        gold_cost_per_unit=160.0,
        created_at=CREATED_AT,
    )


@pytest.fixture
def orb_currencies(
    currency_divine: Currency,
    currency_exalted: Currency,
    currency_chaos: Currency,
) -> list[Currency]:
    """Divine, Exalted, Chaos in that order."""
    return [currency_divine, currency_exalted, currency_chaos]


# =============================================================================
# Rate Fixtures
# =============================================================================


@pytest.fixture
def orb_rates() -> list[ConversionRate]:
    """
    Full rate set between the three orbs.

    Divine -> Chaos -> Exalted -> Divine returns ~8.6031 per unit.
    """
    return [
        make_rate(DIVINE, EXALTED, 720),
        make_rate(DIVINE, CHAOS, 19.75),
        make_rate(EXALTED, DIVINE, 0.00132),
        make_rate(EXALTED, CHAOS, 0.02564),
        make_rate(CHAOS, DIVINE, 0.04926),
        make_rate(CHAOS, EXALTED, 330),
    ]


# =============================================================================
# Book & Store Fixtures
# =============================================================================


@pytest.fixture
def orb_book(
    orb_currencies: list[Currency],
    orb_rates: list[ConversionRate],
) -> CurrencyBook:
    """Book holding the three orbs and all six rates."""
    return CurrencyBook(orb_currencies, orb_rates)


@pytest.fixture
def memory_store() -> MemoryStore:
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def repository(memory_store: MemoryStore) -> CurrencyRepository:
    """Repository over the in-memory store."""
    return CurrencyRepository(memory_store)


# =============================================================================
# Opportunity Factory
# =============================================================================


@pytest.fixture
def make_opportunity() -> Callable[..., ArbitrageOpportunity]:
    """Factory for hand-built opportunities."""

    def _make(
        path: tuple[str, str, str] = ("a", "b", "c"),
        profit_percentage: float = 1.0,
        risk_score: float = 2.0,
        quantities: tuple[int, ...] = (10, 20, 30, 11),
    ) -> ArbitrageOpportunity:
        a, b, c = path
        return ArbitrageOpportunity(
            id=f"{a}-{b}-{c}",
            path=(a, b, c, a),
            rates=(2.0, 1.5, 0.37),
            quantities=quantities,
            base_amount=quantities[0],
            profit_percentage=profit_percentage,
            risk_score=risk_score,
            total_gold_cost=0.0,
        )

    return _make
