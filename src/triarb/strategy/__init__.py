"""Strategy module for cycle discovery and scoring."""

from triarb.strategy.calculator import (
    QuantityPlan,
    calculate_gold_cost,
    calculate_quantities,
)
from triarb.strategy.graph import CycleEnumerator, find_arbitrage_opportunities
from triarb.strategy.matrix import build_rate_matrix, get_rate
from triarb.strategy.opportunity import (
    OpportunityStats,
    filter_opportunities,
    sort_opportunities,
)
from triarb.strategy.risk import (
    calculate_risk_score,
    get_confidence_score,
    get_risk_level,
)


__all__ = [
    "CycleEnumerator",
    "OpportunityStats",
    "QuantityPlan",
    "build_rate_matrix",
    "calculate_gold_cost",
    "calculate_quantities",
    "calculate_risk_score",
    "filter_opportunities",
    "find_arbitrage_opportunities",
    "get_confidence_score",
    "get_rate",
    "get_risk_level",
    "sort_opportunities",
]
