"""
Rate matrix construction.

Flattens the rate list into a two-level dict for O(1) directed lookups
during cycle enumeration.
"""

from collections.abc import Iterable

from triarb.core.types import ConversionRate, RateMatrix


def build_rate_matrix(rates: Iterable[ConversionRate]) -> RateMatrix:
    """
    Build a directed rate lookup from rate records.

    Later records for the same (from, to) pair overwrite earlier ones.
    Pairs without a record are absent from the mapping, never zero.

    Args:
        rates: Conversion rate records in any order.

    Returns:
        Mapping of ``from_id -> to_id -> rate``.
    """
    matrix: RateMatrix = {}

    for rate in rates:
        matrix.setdefault(rate.from_currency_id, {})[rate.to_currency_id] = rate.rate

    return matrix


def get_rate(matrix: RateMatrix, from_id: str, to_id: str) -> float | None:
    """Look up a directed rate, None when no rate exists."""
    row = matrix.get(from_id)
    if row is None:
        return None
    return row.get(to_id)
