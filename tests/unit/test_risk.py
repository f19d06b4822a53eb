"""
Unit tests for risk and confidence scoring.

Tests score components, caps and the risk band boundaries.
"""

import pytest

from triarb.core.types import RiskLevel
from triarb.strategy.risk import (
    calculate_risk_score,
    get_confidence_score,
    get_risk_level,
)


class TestRiskScore:
    """Tests for calculate_risk_score."""

    def test_profit_component_only(self) -> None:
        """Test equal rates contribute no variance risk."""
        assert calculate_risk_score(5.0, [1.0, 1.0, 1.0]) == pytest.approx(0.5)

    def test_profit_component_capped(self) -> None:
        """Test that profit risk stops at 5."""
        assert calculate_risk_score(100.0, [1.0, 1.0, 1.0]) == pytest.approx(5.0)

    def test_variance_component(self) -> None:
        """Test population variance scaled by 100."""
        # mean 1.0, variance (0 + 0.01 + 0.01) / 3
        score = calculate_risk_score(2.0, [1.0, 1.1, 0.9])

        assert score == pytest.approx(0.2 + 0.02 / 3 * 100)

    def test_variance_component_capped(self) -> None:
        """Test that dispersed rates cap variance risk at 5."""
        assert calculate_risk_score(0.0, [0.001, 1000.0, 1.0]) == pytest.approx(5.0)

    def test_total_capped_at_ten(self) -> None:
        """Test the orb triangle reaches the maximum score."""
        assert calculate_risk_score(760.31, [19.75, 330.0, 0.00132]) == 10.0

    def test_negative_profit_floors_at_zero(self) -> None:
        """Test that the score never goes below zero."""
        assert calculate_risk_score(-50.0, [1.0, 1.0, 1.0]) == 0.0

    @pytest.mark.parametrize(
        "profit,rates",
        [
            (0.02, [1.0, 1.0, 1.0002]),
            (3.5, [0.5, 2.0, 1.035]),
            (60.0, [10.0, 0.2, 0.8]),
            (1e6, [1e-9, 1e9, 1.0]),
        ],
    )
    def test_score_bounds(self, profit: float, rates: list[float]) -> None:
        """Test that scores always fall in [0, 10]."""
        score = calculate_risk_score(profit, rates)

        assert 0.0 <= score <= 10.0


class TestConfidenceScore:
    """Tests for get_confidence_score."""

    @pytest.mark.parametrize(
        "risk,expected",
        [
            (0.0, 100.0),
            (3.5, 65.0),
            (10.0, 0.0),
            (12.0, 0.0),
            (-1.0, 100.0),
        ],
    )
    def test_confidence(self, risk: float, expected: float) -> None:
        """Test confidence = 100 - risk * 10, clamped."""
        assert get_confidence_score(risk) == pytest.approx(expected)

    def test_complements_risk(self) -> None:
        """Test the relation for scores produced by the scorer."""
        risk = calculate_risk_score(12.0, [1.2, 0.9, 1.037])

        assert get_confidence_score(risk) == pytest.approx(100 - risk * 10)


class TestRiskLevel:
    """Tests for risk band classification."""

    @pytest.mark.parametrize(
        "score,level",
        [
            (0.0, RiskLevel.LOW),
            (3.0, RiskLevel.LOW),
            (3.01, RiskLevel.MEDIUM),
            (6.0, RiskLevel.MEDIUM),
            (6.5, RiskLevel.HIGH),
            (10.0, RiskLevel.HIGH),
        ],
    )
    def test_bands(self, score: float, level: RiskLevel) -> None:
        """Test band boundaries are inclusive at 3 and 6."""
        assert get_risk_level(score) is level

    def test_string_values(self) -> None:
        """Test the enum serializes to lowercase names."""
        assert RiskLevel.MEDIUM.value == "medium"
        assert RiskLevel("high") is RiskLevel.HIGH
