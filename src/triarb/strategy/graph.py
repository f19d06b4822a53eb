"""
Triangular cycle enumeration.

Exhaustively searches ordered triples of distinct currencies for closed
A -> B -> C -> A loops that return more than they started with. The
search is O(K^3) in the number of currencies with O(1) rate lookups,
which is intended for books of tens of currencies.
"""

import logging
from collections.abc import Iterable, Sequence

from triarb.config.constants import CYCLE_LENGTH, DEFAULT_PRECISION, MIN_PROFIT_PCT
from triarb.core.types import ArbitrageOpportunity, ConversionRate, Currency
from triarb.strategy.calculator import calculate_gold_cost, calculate_quantities
from triarb.strategy.matrix import build_rate_matrix, get_rate
from triarb.strategy.risk import calculate_risk_score


logger = logging.getLogger(__name__)


CycleKey = tuple[str, str, str]


def cycle_key(a: str, b: str, c: str) -> CycleKey:
    """
    Rotation-invariant identity of the directed cycle a -> b -> c -> a.

    The three rotations of a cycle share a key; the reversed cycle
    a -> c -> b -> a does not.
    """
    return min((a, b, c), (b, c, a), (c, a, b))


class CycleEnumerator:
    """
    Finds profitable three-currency cycles in a rate snapshot.

    The enumerator owns read-only copies of its inputs. Each start
    currency can be scanned independently with :meth:`scan_from`;
    :meth:`scan` combines all slices, deduplicates and sorts.
    """

    __slots__ = (
        "_currencies",
        "_ids",
        "_by_id",
        "_rate_count",
        "_matrix",
        "_precision",
        "_min_profit_pct",
    )

    def __init__(
        self,
        currencies: Sequence[Currency],
        rates: Iterable[ConversionRate],
        precision: int = DEFAULT_PRECISION,
        min_profit_pct: float = MIN_PROFIT_PCT,
    ) -> None:
        """
        Initialize the enumerator.

        Args:
            currencies: Currencies to search, in display order.
            rates: Directed conversion rates.
            precision: Largest multiplier for quantity normalization.
            min_profit_pct: Profit (percent) a cycle must exceed.
        """
        if precision < 1:
            raise ValueError(f"Precision must be at least 1, got {precision}")

        rate_list = list(rates)

        self._currencies = tuple(currencies)
        self._ids = tuple(c.id for c in self._currencies)
        self._by_id: dict[str, Currency] = {}
        for currency in self._currencies:
            self._by_id.setdefault(currency.id, currency)
        self._rate_count = len(rate_list)
        self._matrix = build_rate_matrix(rate_list)
        self._precision = precision
        self._min_profit_pct = min_profit_pct

    @property
    def is_searchable(self) -> bool:
        """At least three currencies and one rate are available."""
        return len(self._ids) >= CYCLE_LENGTH and self._rate_count > 0

    def scan_from(self, index: int) -> list[ArbitrageOpportunity]:
        """
        Evaluate every cycle starting at ``currencies[index]``.

        Results are in enumeration order and not deduplicated.

        Args:
            index: Position of the start currency.

        Returns:
            Profitable, executable opportunities starting at that currency.
        """
        opportunities: list[ArbitrageOpportunity] = []
        if not self.is_searchable:
            return opportunities

        ids = self._ids
        count = len(ids)
        currency_a = ids[index]

        for j in range(count):
            currency_b = ids[j]
            # Duplicate ids would collapse the triangle
            if j == index or currency_b == currency_a:
                continue
            rate_ab = get_rate(self._matrix, currency_a, currency_b)
            if rate_ab is None:
                continue

            for k in range(count):
                currency_c = ids[k]
                if k in (index, j) or currency_c in (currency_a, currency_b):
                    continue

                rate_bc = get_rate(self._matrix, currency_b, currency_c)
                rate_ca = get_rate(self._matrix, currency_c, currency_a)
                if rate_bc is None or rate_ca is None:
                    continue

                opportunity = self._evaluate(
                    currency_a, currency_b, currency_c,
                    (rate_ab, rate_bc, rate_ca),
                )
                if opportunity is not None:
                    opportunities.append(opportunity)

        return opportunities

    def scan(self) -> list[ArbitrageOpportunity]:
        """
        Scan all start currencies.

        Returns:
            Opportunities deduplicated by cycle identity (first occurrence
            kept) and sorted by profit, highest first.
        """
        if not self.is_searchable:
            logger.debug(
                f"Skipping scan: {len(self._ids)} currencies, {self._rate_count} rates"
            )
            return []

        seen: set[CycleKey] = set()
        unique: list[ArbitrageOpportunity] = []
        candidates = 0

        for index in range(len(self._ids)):
            for opportunity in self.scan_from(index):
                candidates += 1
                key = cycle_key(*opportunity.path[:3])
                if key in seen:
                    continue
                seen.add(key)
                unique.append(opportunity)

        unique.sort(key=lambda o: o.profit_percentage, reverse=True)

        logger.debug(
            f"Scanned {len(self._ids)} currencies / {self._rate_count} rates: "
            f"{candidates} candidates, {len(unique)} unique cycles "
            f"(precision={self._precision})"
        )

        return unique

    def _evaluate(
        self,
        currency_a: str,
        currency_b: str,
        currency_c: str,
        rates: tuple[float, float, float],
    ) -> ArbitrageOpportunity | None:
        """
        Build an opportunity for one complete triangle.

        Returns:
            Opportunity, or None when the loop is not profitable enough or
            its quantities round to zero.
        """
        rate_ab, rate_bc, rate_ca = rates

        # Start with 1 unit of A
        final_amount = rate_ab * rate_bc * rate_ca
        profit_percentage = (final_amount - 1.0) * 100.0

        if profit_percentage <= self._min_profit_pct:
            return None

        risk_score = calculate_risk_score(profit_percentage, rates)

        plan = calculate_quantities(rates, self._precision)
        if not plan.is_executable:
            logger.debug(
                f"Dropping {currency_a}-{currency_b}-{currency_c}: "
                f"quantities {plan.quantities} at precision {self._precision}"
            )
            return None

        total_gold_cost = calculate_gold_cost(
            (
                self._by_id[currency_b].gold_cost_per_unit,
                self._by_id[currency_c].gold_cost_per_unit,
                self._by_id[currency_a].gold_cost_per_unit,
            ),
            plan.quantities,
        )

        return ArbitrageOpportunity(
            id=f"{currency_a}-{currency_b}-{currency_c}",
            path=(currency_a, currency_b, currency_c, currency_a),
            rates=rates,
            quantities=plan.quantities,
            base_amount=plan.base_amount,
            profit_percentage=profit_percentage,
            risk_score=risk_score,
            total_gold_cost=total_gold_cost,
        )


def find_arbitrage_opportunities(
    currencies: Sequence[Currency],
    rates: Iterable[ConversionRate],
    precision: int = DEFAULT_PRECISION,
    min_profit_pct: float = MIN_PROFIT_PCT,
) -> list[ArbitrageOpportunity]:
    """
    Find profitable triangular cycles.

    Args:
        currencies: Currencies to search.
        rates: Directed conversion rates.
        precision: Largest multiplier for quantity normalization.
        min_profit_pct: Profit (percent) a cycle must exceed.

    Returns:
        Opportunities sorted by profit percentage, highest first.
    """
    return CycleEnumerator(currencies, rates, precision, min_profit_pct).scan()
