"""
Entry point for the discovery engine.

Usage:
    python -m triarb [--store PATH] [--precision N] [--limit N]
                     [--sort KEY] [--risk LEVEL] [--base CURRENCY] [--search TEXT]
    triarb  # if installed via pip
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from triarb.config.constants import MAX_PRECISION, MIN_PRECISION
from triarb.config.settings import Settings, get_settings
from triarb.core.exceptions import StorageError
from triarb.core.types import ArbitrageOpportunity, RiskLevel, SortKey
from triarb.market.book import CurrencyBook
from triarb.storage.store import CurrencyRepository, JsonFileStore
from triarb.strategy.opportunity import (
    OpportunityStats,
    filter_opportunities,
    sort_opportunities,
)
from triarb.telemetry.logger import log_duration, setup_logging
from triarb.utils.math import format_amount, format_profit


logger = logging.getLogger("triarb.cli")


def build_parser() -> argparse.ArgumentParser:
    """Command-line interface definition."""
    parser = argparse.ArgumentParser(
        prog="triarb",
        description="List profitable triangular cycles in a stored currency book.",
    )
    parser.add_argument("--store", help="store file (default: TRIARB_STORE_PATH)")
    parser.add_argument(
        "--precision",
        type=int,
        help=f"largest quantity multiplier, {MIN_PRECISION}-{MAX_PRECISION}",
    )
    parser.add_argument("--min-profit", type=float, help="minimum profit in percent")
    parser.add_argument("--limit", type=int, help="maximum opportunities to print")
    parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        default=SortKey.PROFIT.value,
        help="profit sorts highest first, risk and confidence lowest first",
    )
    parser.add_argument("--risk", choices=[level.value for level in RiskLevel], type=str.lower)
    parser.add_argument("--base", help="only cycles starting at this currency (id or name)")
    parser.add_argument("--search", default="", help="currency name substring")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
    )
    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Apply command-line overrides on top of environment settings."""
    overrides = {
        "store_path": args.store,
        "default_precision": args.precision,
        "min_profit_pct": args.min_profit,
        "max_results": args.limit,
        "log_level": args.log_level,
    }
    base = get_settings()
    changes = {k: v for k, v in overrides.items() if v is not None}
    if not changes:
        return base
    return Settings.model_validate({**base.model_dump(), **changes})


def resolve_base_currency(book: CurrencyBook, value: str) -> str | None:
    """Match a currency by id, then by case-insensitive display name."""
    if value in book:
        return value

    wanted = value.strip().lower()
    for currency in book.currencies:
        if currency.name.lower() == wanted:
            return currency.id
    return None


def log_rate_outliers(book: CurrencyBook) -> None:
    """Warn about rates far from the rest of the book."""
    for rate in book.rate_outliers():
        logger.warning(
            f"Outlier rate {book.name_of(rate.from_currency_id)} -> "
            f"{book.name_of(rate.to_currency_id)}: {format_amount(rate.rate)}"
        )


def format_opportunity(index: int, opportunity: ArbitrageOpportunity, book: CurrencyBook) -> str:
    """Render one opportunity as a short text block."""
    names = " -> ".join(book.name_of(cid) for cid in opportunity.path)
    legs = ", ".join(
        f"{qty} {book.name_of(cid)}"
        for qty, cid in zip(opportunity.quantities, opportunity.path, strict=True)
    )
    rates = ", ".join(format_amount(r) for r in opportunity.rates)
    gold = format_amount(opportunity.total_gold_cost or 0.0, 2)

    return (
        f"{index:3}. {names}\n"
        f"     profit {format_profit(opportunity.profit_percentage)}  "
        f"risk {opportunity.risk_score:.1f} ({opportunity.risk_level.value})  "
        f"confidence {opportunity.confidence:.0f}%\n"
        f"     rates [{rates}]\n"
        f"     trade {legs}  (base x{opportunity.base_amount})\n"
        f"     gold cost {gold}"
    )


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success).
    """
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args)
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    queued_logger = setup_logging(settings.log_level, settings.log_file)
    try:
        repository = CurrencyRepository(JsonFileStore(settings.store_path))
        try:
            book = repository.load_book()
        except StorageError as e:
            logger.error(f"{e}")
            return 1

        logger.info(
            f"Loaded {len(book)} currencies and {len(book.rates)} rates "
            f"from {settings.store_path}"
        )
        log_rate_outliers(book)

        base_currency_id = None
        if args.base:
            base_currency_id = resolve_base_currency(book, args.base)
            if base_currency_id is None:
                print(f"Unknown base currency: {args.base}", file=sys.stderr)
                return 1

        with log_duration(logger, f"Scan at precision {settings.default_precision}"):
            opportunities = book.find_opportunities(
                precision=settings.default_precision,
                min_profit_pct=settings.min_profit_pct,
            )

        if not opportunities:
            print("No arbitrage opportunities found.")
            return 0

        stats = OpportunityStats.from_opportunities(opportunities)
        listed = sort_opportunities(
            filter_opportunities(
                opportunities,
                search=args.search,
                risk_level=RiskLevel(args.risk) if args.risk else None,
                base_currency_id=base_currency_id,
                name_of=book.name_of,
            ),
            SortKey(args.sort),
        )
        shown = listed[: settings.max_results]

        print(f"Found {stats.total} opportunities (showing {len(shown)}):")
        print(
            f"Average profit {format_profit(stats.avg_profit_pct)}, "
            f"best {format_profit(stats.best_profit_pct)}"
        )
        print()
        if not shown:
            print("No opportunities match the filters.")
            return 0

        for i, opportunity in enumerate(shown, 1):
            print(format_opportunity(i, opportunity, book))
            print()

        return 0

    finally:
        queued_logger.stop()


if __name__ == "__main__":
    sys.exit(main())
