"""
Card Price Resolver — Catalog Matcher

Narrows loosely-matching catalog rows down to the ones that match the
request's intent. All checks run on the lower-cased "product name + set name"
text unless stated otherwise:

1. Excluded product categories ("oversized") are always dropped
2. Sport filter: hockey/basketball rows must name their sport
3. Variant intent:
   - parallel requested  -> the parallel string must appear (strict match)
   - base requested      -> no variant keyword may appear
4. Card number requested -> product name must contain "#<number>"

Keyword matching is plain substring matching, so a player name containing a
variant keyword ("Jared" contains "red") excludes that player's base rows.
"""

from __future__ import annotations

import structlog

from cardprice.config import settings
from cardprice.models.candidate import CatalogCandidate
from cardprice.models.card import CardQuery

logger = structlog.get_logger(__name__)


def _contains_any(text: str, terms: list[str]) -> str | None:
    """Return the first term found in text, or None."""
    for term in terms:
        if term.lower() in text:
            return term
    return None


def _rejection_reason(
    candidate: CatalogCandidate,
    card: CardQuery,
    variant_keywords: list[str],
) -> str | None:
    combined = candidate.combined_text

    if _contains_any(combined, settings.EXCLUDED_PRODUCT_TERMS):
        return "excluded_category"

    required = settings.SPORT_REQUIRED_TERMS.get(card.sport.value)
    if required and required.lower() not in combined:
        return "sport_mismatch"

    if card.parallel is not None:
        if card.parallel.lower() not in combined:
            return "parallel_missing"
    elif _contains_any(combined, variant_keywords):
        return "variant_on_base_request"

    if card.card_number is not None:
        if f"#{card.card_number.lower()}" not in candidate.product_name.lower():
            return "card_number_mismatch"

    return None


def filter_catalog(
    candidates: list[CatalogCandidate],
    card: CardQuery,
    variant_keywords: list[str] | None = None,
) -> list[CatalogCandidate]:
    """
    Filter catalog candidates by category, sport, variant intent and card number.

    Args:
        candidates: Rows returned by a catalog search.
        card: The card being priced.
        variant_keywords: Override for VARIANT_KEYWORDS.

    Returns:
        Matching candidates in source order. An empty list is a normal outcome.
    """
    keywords = variant_keywords if variant_keywords is not None else settings.VARIANT_KEYWORDS

    kept: list[CatalogCandidate] = []
    dropped: dict[str, int] = {}
    for candidate in candidates:
        reason = _rejection_reason(candidate, card, keywords)
        if reason is None:
            kept.append(candidate)
        else:
            dropped[reason] = dropped.get(reason, 0) + 1

    logger.info(
        "catalog_match_complete",
        input_count=len(candidates),
        kept_count=len(kept),
        dropped=dropped,
        sport=card.sport.value,
        parallel=card.parallel or "base",
        card_number=card.card_number,
        keyword_config_version=settings.KEYWORD_CONFIG_VERSION,
        source="matcher",
    )
    return kept
