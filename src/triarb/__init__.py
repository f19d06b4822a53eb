"""
Triangular Arbitrage Discovery.

Models a book of tradeable currencies with directed conversion rates and
surfaces profitable three-hop cycles with integer trade quantities,
heuristic risk scores and gold-cost pricing.
"""

__version__ = "1.0.0"
__author__ = "Tim"
