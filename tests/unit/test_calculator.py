"""
Unit tests for quantity normalization and gold-cost pricing.
"""

import pytest

from triarb.strategy.calculator import (
    QuantityPlan,
    calculate_gold_cost,
    calculate_quantities,
    chain_amounts,
)


class TestChainAmounts:
    """Tests for chain_amounts."""

    def test_chain_starts_at_one(self) -> None:
        """Test that the chain starts from one unit."""
        assert chain_amounts([]) == [1.0]

    def test_chain_multiplies(self) -> None:
        """Test running products along the chain."""
        assert chain_amounts([2.0, 0.5, 3.0]) == [1.0, 2.0, 1.0, 3.0]


class TestCalculateQuantities:
    """Tests for calculate_quantities."""

    def test_integer_rates_need_no_scaling(self) -> None:
        """Test that whole-number chains use multiplier 1."""
        plan = calculate_quantities([2.0, 3.0, 0.5], precision=1000)

        assert plan == QuantityPlan(quantities=(1, 2, 6, 3), base_amount=1, exact=True)

    def test_smallest_multiplier_wins(self) -> None:
        """Test that the first integral multiplier is accepted."""
        plan = calculate_quantities([2.0, 0.5, 1.5], precision=1000)

        assert plan.base_amount == 2
        assert plan.quantities == (2, 4, 2, 3)
        assert plan.exact

    def test_fractional_rate_multiplier(self) -> None:
        """Test a chain that needs multiplier 4."""
        plan = calculate_quantities([0.25, 4.0, 3.0], precision=1000)

        assert plan.base_amount == 4
        assert plan.quantities == (4, 1, 4, 12)

    def test_thirds_need_multiplier_fifteen(self) -> None:
        """Test tolerance-based acceptance for repeating decimals."""
        plan = calculate_quantities([1 / 3, 3.0, 1.2], precision=100)

        assert plan.base_amount == 15
        assert plan.quantities == (15, 5, 15, 18)
        assert plan.exact

    def test_fallback_rounds_at_precision(self) -> None:
        """Test fallback to the precision bound when no multiplier fits."""
        plan = calculate_quantities([1 / 3, 3.0, 1.2], precision=5)

        assert plan.base_amount == 5
        assert plan.quantities == (5, 2, 5, 6)
        assert not plan.exact

    def test_fallback_can_yield_zero(self) -> None:
        """Test that extreme hops round to zero and are not executable."""
        plan = calculate_quantities([0.001, 1000.0, 1.0], precision=10)

        assert plan.quantities == (10, 0, 10, 10)
        assert not plan.is_executable

    def test_fallback_rounds_half_up(self) -> None:
        """Test that .5 ties round up, not to even."""
        plan = calculate_quantities([19.75, 330.0, 0.00132], precision=10)

        assert plan.base_amount == 10
        assert plan.quantities[1] == 198  # 197.5
        assert plan.quantities[2] == 65175

    def test_quantities_are_ints(self) -> None:
        """Test that quantities are real ints, not floats."""
        plan = calculate_quantities([19.75, 330.0, 0.00132], precision=1000)

        assert all(isinstance(q, int) for q in plan.quantities)
        assert isinstance(plan.base_amount, int)

    def test_first_quantity_is_base_amount(self) -> None:
        """Test that quantities[0] equals the base amount."""
        for precision in (1, 10, 1000):
            plan = calculate_quantities([19.75, 330.0, 0.00132], precision=precision)
            assert plan.quantities[0] == plan.base_amount

    def test_near_integer_within_tolerance(self) -> None:
        """Test that float noise below 1e-4 still counts as integral."""
        plan = calculate_quantities([1.001, 1.0, 1.0], precision=1000)

        assert plan.base_amount == 1000
        assert plan.quantities == (1000, 1001, 1001, 1001)

    def test_invalid_precision(self) -> None:
        """Test that precision below 1 is rejected."""
        with pytest.raises(ValueError, match="Precision"):
            calculate_quantities([2.0], precision=0)


class TestCalculateGoldCost:
    """Tests for calculate_gold_cost."""

    def test_destination_costs(self) -> None:
        """Test that each hop is charged at its destination's cost."""
        total = calculate_gold_cost([160.0, 120.0, 800.0], [1000, 19750, 6517500, 8603])

        # 160 * 19750 + 120 * 6517500 + 800 * 8603
        assert total == pytest.approx(792_142_400.0)

    def test_base_amount_not_charged(self) -> None:
        """Test that the starting quantity carries no cost."""
        assert calculate_gold_cost([1.0, 1.0, 1.0], [1_000_000, 1, 1, 1]) == 3.0

    def test_zero_costs(self) -> None:
        """Test that zero costs give a zero total."""
        assert calculate_gold_cost([0.0, 0.0, 0.0], [5, 6, 7, 8]) == 0.0

    def test_linear_in_quantities(self) -> None:
        """Test that doubling quantities doubles the cost."""
        costs = [3.0, 4.0, 5.0]
        single = calculate_gold_cost(costs, [2, 4, 6, 3])
        double = calculate_gold_cost(costs, [4, 8, 12, 6])

        assert double == pytest.approx(2 * single)

    def test_length_mismatch(self) -> None:
        """Test that quantities must have one more entry than costs."""
        with pytest.raises(ValueError, match="quantities"):
            calculate_gold_cost([1.0, 2.0, 3.0], [1, 2, 3])
