"""
Quantity and gold-cost calculation.

Turns a chain of fractional conversion rates into whole-number trade
sizes, and prices those sizes in the secondary gold unit.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from triarb.config.constants import DEFAULT_PRECISION, INTEGER_TOLERANCE
from triarb.utils.math import is_near_integer, round_half_up


@dataclass(slots=True, frozen=True)
class QuantityPlan:
    """
    Integer trade sizes for a conversion chain.

    ``quantities[0] == base_amount`` units of the start currency;
    ``quantities[i]`` is the amount held after hop ``i``.
    """

    quantities: tuple[int, ...]
    base_amount: int
    exact: bool

    @property
    def is_executable(self) -> bool:
        """Every amount in the chain is a positive whole quantity."""
        return all(qty > 0 for qty in self.quantities)


def chain_amounts(rates: Sequence[float]) -> list[float]:
    """
    Amounts held along a conversion chain starting from one unit.

    Example:
        >>> chain_amounts([2.0, 0.5, 3.0])
        [1.0, 2.0, 1.0, 3.0]
    """
    amounts = [1.0]
    for rate in rates:
        amounts.append(amounts[-1] * rate)
    return amounts


def calculate_quantities(
    rates: Sequence[float],
    precision: int = DEFAULT_PRECISION,
) -> QuantityPlan:
    """
    Scale a rate chain to whole-number quantities.

    Tries multipliers 1, 2, ..., ``precision`` and accepts the first one
    that puts every scaled chain amount within 1e-4 of an integer. When
    none does, the chain is scaled by ``precision`` itself and rounded,
    which can produce zeros for hops with extreme rates.

    Args:
        rates: Multiplicative rates, one per hop.
        precision: Largest multiplier to try, at least 1.

    Returns:
        QuantityPlan with len(rates) + 1 quantities.
    """
    if precision < 1:
        raise ValueError(f"Precision must be at least 1, got {precision}")

    amounts = chain_amounts(rates)

    for multiplier in range(1, precision + 1):
        scaled = [amount * multiplier for amount in amounts]
        if all(is_near_integer(value, INTEGER_TOLERANCE) for value in scaled):
            return QuantityPlan(
                quantities=tuple(round_half_up(value) for value in scaled),
                base_amount=multiplier,
                exact=True,
            )

    # Fallback: round at the largest allowed multiplier
    return QuantityPlan(
        quantities=tuple(round_half_up(amount * precision) for amount in amounts),
        base_amount=precision,
        exact=False,
    )


def calculate_gold_cost(
    step_costs: Sequence[float],
    quantities: Sequence[int],
) -> float:
    """
    Price a conversion chain in gold.

    Each hop is charged at the destination currency's cost per unit times
    the quantity of that currency received, so ``step_costs[i]`` pairs
    with ``quantities[i + 1]``.

    Args:
        step_costs: Gold cost per unit of each hop's destination currency.
        quantities: Chain quantities including the base amount.

    Returns:
        Total gold cost of all hops.
    """
    if len(quantities) != len(step_costs) + 1:
        raise ValueError(
            f"Expected {len(step_costs) + 1} quantities for {len(step_costs)} hops, "
            f"got {len(quantities)}"
        )

    return float(
        sum(cost * qty for cost, qty in zip(step_costs, quantities[1:], strict=True))
    )
