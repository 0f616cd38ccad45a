"""
Card Price Resolver — Listing Noise Filter

Drops sold-listing candidates that should never feed a raw-card estimate.
Any one of these excludes a candidate:
1. Empty title, placeholder title, or sponsored boilerplate
2. Price not parseable as a positive decimal
3. Title contains a grading term
4. Price outside the plausibility band [MIN_LISTING_PRICE, MAX_LISTING_PRICE]

Matching is case-insensitive substring matching. A player name that happens
to contain a grading term is excluded too; that is a known limit of the rule.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

import structlog

from cardprice.config import settings
from cardprice.errors import MalformedCandidate
from cardprice.models.candidate import Candidate

logger = structlog.get_logger(__name__)

_NUMBER_RE = re.compile(r"\d[\d,]*(?:\.\d+)?")
_ZERO = Decimal("0")


def parse_price(raw: Any) -> Decimal | None:
    """
    Parse a raw price like '$1,234.56' or '$10.00 to $15.00' to Decimal.

    Currency symbols and thousands separators are ignored and the first
    number in the text wins. Returns None unless the result is positive.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float)):
        try:
            value = Decimal(str(raw))
        except InvalidOperation:
            return None
    else:
        match = _NUMBER_RE.search(str(raw))
        if not match:
            return None
        try:
            value = Decimal(match.group().replace(",", ""))
        except InvalidOperation:
            return None

    if not value.is_finite() or value <= _ZERO:
        return None
    return value


def _rejection_reason(
    candidate: Candidate,
    grading_terms: list[str],
    min_price: Decimal,
    max_price: Decimal,
) -> str | None:
    title = (candidate.title or "").strip()
    title_lower = title.lower()

    if not title:
        return "empty_title"
    if title_lower in {t.lower() for t in settings.PLACEHOLDER_TITLES}:
        return "placeholder_title"
    if any(phrase.lower() in title_lower for phrase in settings.SPONSORED_PHRASES):
        return "sponsored"

    price = parse_price(candidate.raw_price)
    if price is None:
        raise MalformedCandidate(f"unparseable price: {candidate.raw_price!r}")

    if any(term.lower() in title_lower for term in grading_terms):
        return "graded"
    if price < min_price or price > max_price:
        return "price_out_of_band"
    return None


def filter_listings(
    raw: list[Candidate],
    grading_terms: list[str] | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
) -> list[Candidate]:
    """
    Remove ads, graded cards and implausible prices from sold listings.

    Args:
        raw: Candidates as returned by a listing source.
        grading_terms: Override for GRADING_TERMS.
        min_price: Override for MIN_LISTING_PRICE (inclusive).
        max_price: Override for MAX_LISTING_PRICE (inclusive).

    Returns:
        Surviving candidates in input order. Never raises for a bad candidate.
    """
    terms = grading_terms if grading_terms is not None else settings.GRADING_TERMS
    low = min_price if min_price is not None else settings.MIN_LISTING_PRICE
    high = max_price if max_price is not None else settings.MAX_LISTING_PRICE

    kept: list[Candidate] = []
    dropped: dict[str, int] = {}

    for candidate in raw:
        try:
            reason = _rejection_reason(candidate, terms, low, high)
        except MalformedCandidate:
            reason = "malformed_price"

        if reason is None:
            kept.append(candidate)
        else:
            dropped[reason] = dropped.get(reason, 0) + 1

    logger.info(
        "noise_filter_complete",
        input_count=len(raw),
        kept_count=len(kept),
        dropped=dropped,
        source="noise",
    )
    return kept
