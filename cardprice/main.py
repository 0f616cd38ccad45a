"""
Card Price Resolver — Command-line Entrypoint

Resolves a price for one card and prints the PriceResult as JSON.

Usage:
    python -m cardprice.main --player "Connor Bedard" --year 2023-24 \
        --brand "Upper Deck" --series "Series 1" --sport hockey --card-number 201
    python -m cardprice.main --json card.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from cardprice import __version__
from cardprice.config import Sport, settings
from cardprice.models.card import CardQuery
from cardprice.models.result import PriceResult
from cardprice.pipeline.resolver import PriceResolver


# ---------------------------------------------------------------------------
# Structlog Configuration
# ---------------------------------------------------------------------------


def _configure_logging(log_level: str = "INFO") -> None:
    """
    Set up structured logging with JSON output on stderr.

    stdout is reserved for the PriceResult document.
    """
    level = getattr(logging, log_level.upper())

    # Configure stdlib logging first (for third-party libraries)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resolve a fair-market price for a raw trading card.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cardprice.main --player "Connor Bedard" --year 2023-24 --brand "Upper Deck" --sport hockey
  python -m cardprice.main --player "Victor Wembanyama" --brand Panini --series Prizm --sport basketball --parallel Silver
  python -m cardprice.main --json card.json
""",
    )
    parser.add_argument("--json", type=Path, default=None, help="JSON file with the card attributes.")
    parser.add_argument("--player", type=str, default=None, help="Player name (required unless --json).")
    parser.add_argument("--year", type=str, default=None, help="Season label, e.g. 2024-25.")
    parser.add_argument("--brand", type=str, default=None, help="Manufacturer, e.g. 'Upper Deck'.")
    parser.add_argument("--series", type=str, default=None, help="Product line, e.g. 'Series 1'.")
    parser.add_argument(
        "--sport",
        type=str,
        default=Sport.OTHER.value,
        choices=[s.value for s in Sport],
        help="Sport of the card (default: other).",
    )
    parser.add_argument("--card-number", type=str, default=None, help="Printed card number.")
    parser.add_argument("--parallel", type=str, default=None, help="Parallel/variant name (omit for base).")
    parser.add_argument("--log-level", type=str, default=settings.LOG_LEVEL, help="DEBUG, INFO, WARNING, ERROR.")
    return parser.parse_args(argv)


def card_from_args(args: argparse.Namespace) -> CardQuery:
    """Build a CardQuery from --json or the individual attribute flags."""
    if args.json is not None:
        data: dict[str, Any] = json.loads(args.json.read_text(encoding="utf-8"))
        return CardQuery.model_validate(data)

    return CardQuery(
        player=args.player or "",
        year=args.year,
        brand=args.brand,
        series=args.series,
        sport=args.sport,
        card_number=args.card_number,
        parallel=args.parallel,
    )


async def run(card: CardQuery) -> PriceResult:
    logger = structlog.get_logger(__name__)
    logger.info("card_price_resolve_begin", version=__version__, player=card.player)
    return await PriceResolver.default().resolve(card)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(log_level=args.log_level)
    logger = structlog.get_logger(__name__)

    try:
        card = card_from_args(args)
    except (ValidationError, ValueError, OSError) as e:
        logger.error("card_attributes_invalid", error=str(e), error_type=type(e).__name__)
        print(f"invalid card attributes: {e}", file=sys.stderr)
        return 2

    result = asyncio.run(run(card))
    print(result.model_dump_json(indent=2))
    return 0 if result.found else 1


# ---------------------------------------------------------------------------
# CLI Entry
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    sys.exit(main())
