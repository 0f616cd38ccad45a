"""
Card Price Resolver — Base Card Ranker

Orders filtered catalog rows so the first one is the most likely base card.
Sort key, most significant first:

    basketball / baseball : rows without a deprioritize keyword first
    hockey                : "Young Guns" first, then the flagship Upper Deck set first
    all sports            : fewer words in the set name first

sorted() is stable, so rows that tie on every key keep their source order.
"""

from __future__ import annotations

import re

import structlog

from cardprice.config import Sport, settings
from cardprice.models.candidate import CatalogCandidate

logger = structlog.get_logger(__name__)


def is_hockey_flagship(set_name: str) -> bool:
    """True for set names like 'Hockey Cards 2023-24 Upper Deck'."""
    return re.fullmatch(settings.HOCKEY_FLAGSHIP_SET_PATTERN, set_name.strip().lower()) is not None


def _sport_key(
    candidate: CatalogCandidate,
    sport: Sport,
    deprioritize: list[str],
) -> tuple[int, ...]:
    text = candidate.combined_text

    if sport.value in settings.BASE_SET_RANKED_SPORTS:
        deprioritized = any(term.lower() in text for term in deprioritize)
        return (1 if deprioritized else 0,)

    if sport == Sport.HOCKEY:
        flagship = is_hockey_flagship(candidate.set_name)
        young_guns = settings.YOUNG_GUNS_TERM.lower() in text
        return (0 if young_guns else 1, 0 if flagship else 1)

    return ()


def rank(
    candidates: list[CatalogCandidate],
    sport: Sport,
    deprioritize_keywords: list[str] | None = None,
) -> list[CatalogCandidate]:
    """
    Deterministically order base-card candidates, best match first.

    Args:
        candidates: Output of the catalog matcher for a base-card request.
        sport: Sport of the requested card.
        deprioritize_keywords: Override for DEPRIORITIZE_KEYWORDS.

    Returns:
        New list; the input is not modified.
    """
    deprioritize = (
        deprioritize_keywords
        if deprioritize_keywords is not None
        else settings.DEPRIORITIZE_KEYWORDS
    )

    ranked = sorted(
        candidates,
        key=lambda c: (*_sport_key(c, sport, deprioritize), len(c.set_name.split())),
    )

    if ranked:
        logger.debug(
            "catalog_ranked",
            sport=sport.value,
            candidate_count=len(ranked),
            top_product=ranked[0].product_name,
            top_set=ranked[0].set_name,
            source="ranker",
        )
    return ranked
