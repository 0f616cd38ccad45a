"""
Card Price Resolver — Query Builder

Canonical term order:
    year, brand, series, player, #card_number, parallel

Absent fields are skipped, never emitted as blank tokens. URL escaping is the
HTTP client's job.
"""

from __future__ import annotations

import structlog

from cardprice.models.card import CardQuery

logger = structlog.get_logger(__name__)


def _join(terms: list[str | None]) -> str:
    return " ".join(term for term in terms if term)


def build_query(card: CardQuery) -> str:
    """
    Build the full search string for a free-text listing search.

    Args:
        card: Normalized card attributes.

    Returns:
        Whitespace-joined search terms, e.g. "2023-24 Upper Deck Series 1 Connor Bedard #201".
    """
    query = _join([
        card.year,
        card.brand,
        card.series,
        card.player,
        f"#{card.card_number}" if card.card_number else None,
        card.parallel,
    ])
    logger.debug("query_built", query=query, source="query")
    return query


def build_catalog_query(card: CardQuery) -> str:
    """
    Build the broader catalog search string.

    Card number and parallel are left out; the catalog matcher narrows the
    results on them afterwards.
    """
    query = _join([card.year, card.brand, card.series, card.player])
    logger.debug("catalog_query_built", query=query, source="query")
    return query
