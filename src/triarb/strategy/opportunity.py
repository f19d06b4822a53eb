"""
Opportunity filtering, ordering and summary statistics.

Helpers for presentation layers that list the engine's results; none of
them change what the engine finds.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from triarb.core.types import ArbitrageOpportunity, RiskLevel, SortKey


# Resolves a currency id to its display name
NameResolver = Callable[[str], str]


@dataclass(slots=True, frozen=True)
class OpportunityStats:
    """Summary of a result set."""

    total: int = 0
    profitable: int = 0
    avg_profit_pct: float = 0.0
    best_profit_pct: float = 0.0

    @classmethod
    def from_opportunities(
        cls, opportunities: Sequence[ArbitrageOpportunity]
    ) -> "OpportunityStats":
        """Compute stats over a list of opportunities."""
        if not opportunities:
            return cls()

        profits = [o.profit_percentage for o in opportunities]
        return cls(
            total=len(opportunities),
            profitable=sum(1 for p in profits if p > 0),
            avg_profit_pct=sum(profits) / len(profits),
            best_profit_pct=max(profits),
        )


def filter_opportunities(
    opportunities: Iterable[ArbitrageOpportunity],
    *,
    search: str = "",
    risk_level: RiskLevel | None = None,
    base_currency_id: str | None = None,
    name_of: NameResolver | None = None,
) -> list[ArbitrageOpportunity]:
    """
    Narrow a result list for display.

    Args:
        opportunities: Engine results.
        search: Case-insensitive substring matched against the display
            name of any currency on the path. Empty matches everything.
        risk_level: Keep only this risk band.
        base_currency_id: Keep only cycles starting at this currency.
        name_of: Display-name lookup; defaults to the raw id.

    Returns:
        Matching executable opportunities, order preserved.
    """
    needle = search.strip().lower()
    resolve = name_of or (lambda currency_id: currency_id)

    result: list[ArbitrageOpportunity] = []
    for opportunity in opportunities:
        if not opportunity.is_executable:
            continue
        if risk_level is not None and opportunity.risk_level != risk_level:
            continue
        if base_currency_id is not None and opportunity.base_currency_id != base_currency_id:
            continue
        if needle and not any(needle in resolve(cid).lower() for cid in opportunity.path):
            continue
        result.append(opportunity)

    return result


def sort_opportunities(
    opportunities: Iterable[ArbitrageOpportunity],
    by: SortKey = SortKey.PROFIT,
) -> list[ArbitrageOpportunity]:
    """
    Order opportunities for display.

    Profit sorts highest first; risk and confidence sort lowest first.
    """
    if by == SortKey.PROFIT:
        return sorted(opportunities, key=lambda o: o.profit_percentage, reverse=True)
    if by == SortKey.RISK:
        return sorted(opportunities, key=lambda o: o.risk_score)
    return sorted(opportunities, key=lambda o: o.confidence)
