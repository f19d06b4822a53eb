#!/usr/bin/env python3
"""
Discovery Benchmark Script.

Measures full-scan latency for synthetic books of increasing size.
"""

import random
import statistics
import sys
import time
from pathlib import Path

# Add src to path for direct execution
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from triarb.core.types import ConversionRate, Currency
from triarb.strategy.graph import find_arbitrage_opportunities


def build_book(size: int, density: float = 0.8, seed: int = 42) -> tuple[list[Currency], list[ConversionRate]]:
    """Random book with rates near parity so some cycles are profitable."""
    rng = random.Random(seed)
    currencies = [
        Currency(id=f"c{i}", name=f"Currency {i}", gold_cost_per_unit=rng.uniform(0, 500))
        for i in range(size)
    ]

    rates = [
        ConversionRate(a.id, b.id, rng.uniform(0.8, 1.25))
        for a in currencies
        for b in currencies
        if a.id != b.id and rng.random() < density
    ]
    return currencies, rates


def benchmark_scan(size: int, iterations: int, precision: int = 1000) -> dict[str, float]:
    """Benchmark a full scan, in milliseconds."""
    currencies, rates = build_book(size)
    latencies: list[float] = []
    found = 0

    for _ in range(iterations):
        start = time.perf_counter()
        found = len(find_arbitrage_opportunities(currencies, rates, precision))
        latencies.append((time.perf_counter() - start) * 1000)

    return {
        "min": min(latencies),
        "max": max(latencies),
        "avg": statistics.mean(latencies),
        "p50": statistics.median(latencies),
        "found": found,
    }


def format_stats(stats: dict[str, float]) -> str:
    """Format stats for display."""
    return (
        f"min={stats['min']:.1f}ms, "
        f"avg={stats['avg']:.1f}ms, "
        f"p50={stats['p50']:.1f}ms, "
        f"max={stats['max']:.1f}ms, "
        f"found={int(stats['found'])}"
    )


def main() -> int:
    """Run all benchmarks."""
    print("=" * 70)
    print("  DISCOVERY BENCHMARK")
    print("=" * 70)
    print()

    # Warm up
    print("Warming up...")
    benchmark_scan(5, 5)
    print()

    print("Running benchmarks...")
    print()

    for i, (size, iterations) in enumerate([(10, 50), (20, 20), (40, 5)], 1):
        print(f"{i}. Full scan, {size} currencies ({iterations} iterations)")
        stats = benchmark_scan(size, iterations)
        print(f"   {format_stats(stats)}")
        print()

    print("=" * 70)
    print("  SUMMARY")
    print("=" * 70)
    print()
    print("Scan cost grows with K^3 currencies times the quantity search")
    print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
