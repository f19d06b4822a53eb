"""
Heuristic risk and confidence scoring.

Scores are simple rules of thumb: large profits and widely dispersed
rates both raise the risk score. They are not calibrated probabilities
and should not be read as predictions of execution success.
"""

from collections.abc import Sequence

from triarb.config.constants import (
    MAX_PROFIT_RISK,
    MAX_RISK_SCORE,
    MAX_VARIANCE_RISK,
    PROFIT_RISK_DIVISOR,
    VARIANCE_RISK_MULTIPLIER,
)
from triarb.core.types import RiskLevel
from triarb.utils.math import clamp, confidence_from_risk, population_variance


def calculate_risk_score(profit_percentage: float, rates: Sequence[float]) -> float:
    """
    Score a cycle's risk on a 0-10 scale.

    profit risk = min(profit% / 10, 5), variance risk = min(var(rates) * 100, 5);
    the score is their sum capped at 10.

    Args:
        profit_percentage: Cycle profit in percent.
        rates: The cycle's hop rates.

    Returns:
        Risk score in [0, 10].
    """
    profit_risk = min(profit_percentage / PROFIT_RISK_DIVISOR, MAX_PROFIT_RISK)
    variance_risk = min(
        population_variance(rates) * VARIANCE_RISK_MULTIPLIER, MAX_VARIANCE_RISK
    )

    return clamp(profit_risk + variance_risk, 0.0, MAX_RISK_SCORE)


def get_confidence_score(risk_score: float) -> float:
    """Confidence percentage: 100 - risk * 10, clamped to [0, 100]."""
    return confidence_from_risk(risk_score)


def get_risk_level(risk_score: float) -> RiskLevel:
    """Risk band for a score."""
    return RiskLevel.from_score(risk_score)
