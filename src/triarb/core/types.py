"""
Type definitions for the discovery engine.

This module contains the dataclasses, enums and Protocol definitions
used throughout the application. Value objects are frozen so the engine
can never mutate the snapshots it is handed.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Protocol, TypeAlias

from triarb.config.constants import LOW_RISK_MAX, MEDIUM_RISK_MAX
from triarb.utils.math import confidence_from_risk
from triarb.utils.time import utc_now


# Directed rate lookup: matrix[from_id][to_id] -> rate
RateMatrix: TypeAlias = dict[str, dict[str, float]]


# =============================================================================
# Enums
# =============================================================================


class RiskLevel(str, Enum):
    """Risk band derived from a 0-10 risk score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_score(cls, risk_score: float) -> "RiskLevel":
        """Classify a risk score (<= 3 low, <= 6 medium, else high)."""
        if risk_score <= LOW_RISK_MAX:
            return cls.LOW
        if risk_score <= MEDIUM_RISK_MAX:
            return cls.MEDIUM
        return cls.HIGH


class SortKey(str, Enum):
    """Orderings offered for opportunity listings."""

    PROFIT = "profit"
    RISK = "risk"
    CONFIDENCE = "confidence"


# =============================================================================
# Book Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class Currency:
    """
    Tradeable currency.

    ``gold_cost_per_unit`` prices one unit in the secondary "gold" unit
    and only feeds the informational gold-cost total.
    """

    id: str
    name: str
    icon: str = ""
    gold_cost_per_unit: float = 0.0
    is_custom_icon: bool = False
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if self.gold_cost_per_unit < 0 or math.isnan(self.gold_cost_per_unit):
            raise ValueError(
                f"Gold cost per unit must be non-negative, got {self.gold_cost_per_unit}"
            )


@dataclass(slots=True, frozen=True)
class ConversionRate:
    """
    Directed conversion rate.

    One unit of ``from_currency_id`` yields ``rate`` units of
    ``to_currency_id``. The reverse direction is an independent record.
    """

    from_currency_id: str
    to_currency_id: str
    rate: float
    from_quantity: float | None = None
    to_quantity: float | None = None
    last_updated: datetime = field(default_factory=utc_now)

    @classmethod
    def from_quantities(
        cls,
        from_currency_id: str,
        to_currency_id: str,
        from_quantity: float,
        to_quantity: float,
    ) -> "ConversionRate":
        """
        Build a rate from an observed trade ("give X, receive Y").

        Args:
            from_currency_id: Currency given.
            to_currency_id: Currency received.
            from_quantity: Amount given, must be positive.
            to_quantity: Amount received.

        Returns:
            Rate with ``rate = to_quantity / from_quantity``.
        """
        if from_quantity <= 0:
            raise ValueError(f"from_quantity must be positive, got {from_quantity}")
        return cls(
            from_currency_id=from_currency_id,
            to_currency_id=to_currency_id,
            rate=to_quantity / from_quantity,
            from_quantity=from_quantity,
            to_quantity=to_quantity,
        )

    @property
    def pair(self) -> tuple[str, str]:
        """Ordered (from, to) key."""
        return self.from_currency_id, self.to_currency_id

    def __repr__(self) -> str:
        return f"{self.from_currency_id}->{self.to_currency_id}({self.rate:g})"


# =============================================================================
# Opportunity Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class ArbitrageOpportunity:
    """
    Profitable closed conversion cycle.

    ``path`` holds four ids with ``path[0] == path[-1]``; ``quantities``
    runs parallel to it, starting with ``base_amount`` units of the start
    currency.
    """

    id: str
    path: tuple[str, ...]
    rates: tuple[float, ...]
    quantities: tuple[int, ...]
    base_amount: int
    profit_percentage: float
    risk_score: float
    min_amount: float | None = None
    max_amount: float | None = None
    total_gold_cost: float | None = None

    @property
    def base_currency_id(self) -> str:
        """Currency the cycle starts and ends in."""
        return self.path[0]

    @property
    def final_amount(self) -> float:
        """Units of the start currency returned per unit invested."""
        return 1.0 + self.profit_percentage / 100.0

    @property
    def confidence(self) -> float:
        """Complement of the risk score on a 0-100 scale."""
        return confidence_from_risk(self.risk_score)

    @property
    def risk_level(self) -> RiskLevel:
        """Risk band for display and filtering."""
        return RiskLevel.from_score(self.risk_score)

    @property
    def is_executable(self) -> bool:
        """Every leg moves a positive whole quantity."""
        return all(qty > 0 for qty in self.quantities)


# =============================================================================
# Protocols (Interfaces)
# =============================================================================


class IconResolver(Protocol):
    """Maps an icon reference to a displayable asset path."""

    def resolve(self, icon_id: str) -> str | None:
        """Return the asset path, or None when the icon is unknown."""
        ...
