"""
Card Price Resolver — Source contracts & resolution stages

A source adapter only fetches. A stage wraps one adapter with the cleaning
logic for its kind of data and turns it into a PriceResult:

    LiveListingsStage : query -> sold listings -> noise filter -> IQR summary
    CatalogStage      : query -> catalog rows -> matcher -> ranker -> best match

Stages raise PricingError subclasses for every "no usable price" outcome;
the resolver turns those into fallback.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Protocol

import structlog

from cardprice.config import PriceSourceName
from cardprice.engine.matcher import filter_catalog
from cardprice.engine.noise import filter_listings, parse_price
from cardprice.engine.outliers import summarize
from cardprice.engine.query import build_catalog_query, build_query
from cardprice.engine.ranker import rank
from cardprice.errors import AllFiltered, NoData
from cardprice.models.candidate import Candidate, CatalogCandidate
from cardprice.models.card import CardQuery
from cardprice.models.result import CatalogMatch, PriceRange, PriceResult

logger = structlog.get_logger(__name__)

_TWO_DP = Decimal("0.01")
_ZERO = Decimal("0")


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(_TWO_DP, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Adapter contracts
# ---------------------------------------------------------------------------


class ListingSource(Protocol):
    """Free-text sold listings for a query."""

    name: PriceSourceName

    async def fetch_sold_listings(self, query: str) -> list[Candidate]: ...


class CatalogSource(Protocol):
    """
    Structured pricing catalog.

    Single-call catalogs return prices in search rows; two-step catalogs leave
    CatalogCandidate.price empty and answer fetch_catalog_detail instead.
    """

    name: PriceSourceName

    async def search_catalog(self, query: str) -> list[CatalogCandidate]: ...

    async def fetch_catalog_detail(self, product_id: str) -> Decimal | None: ...


class ResolutionStage(Protocol):
    """One source slot in the resolver's priority list."""

    source: PriceSourceName

    async def run(self, card: CardQuery) -> PriceResult: ...


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


class LiveListingsStage:
    """Prices a card from recent sold listings."""

    source = PriceSourceName.LIVE_LISTINGS

    def __init__(self, client: ListingSource) -> None:
        self._client = client

    async def run(self, card: CardQuery) -> PriceResult:
        query = build_query(card)
        raw = await self._client.fetch_sold_listings(query)
        if not raw:
            raise NoData("No sold listings found for this card")

        cleaned = filter_listings(raw)
        if not cleaned:
            raise AllFiltered("No usable sold listings after filtering")

        prices = [p for p in (parse_price(c.raw_price) for c in cleaned) if p is not None]
        summary = summarize(prices)
        if summary is None:
            raise AllFiltered("No valid prices found after filtering")

        logger.info(
            "live_listings_priced",
            query=query,
            price=str(summary.mean),
            sample_count=summary.count,
            low=str(summary.low),
            high=str(summary.high),
            source="live_listings",
        )
        return PriceResult(
            found=True,
            price=summary.mean,
            sample_count=summary.count,
            price_range=PriceRange(low=_quantize(summary.low), high=_quantize(summary.high)),
            source=self.source,
            query=query,
            prices=summary.prices,
        )


class CatalogStage:
    """Prices a card from the best-matching catalog entry."""

    source = PriceSourceName.CATALOG

    def __init__(self, client: CatalogSource) -> None:
        self._client = client

    async def run(self, card: CardQuery) -> PriceResult:
        query = build_catalog_query(card)
        rows = await self._client.search_catalog(query)
        if not rows:
            raise NoData("No catalog results for query")

        matches = filter_catalog(rows, card)
        if not matches:
            raise AllFiltered("No matching cards found after filtering")

        # Variant requests are already narrowed by the strict parallel match
        if card.wants_base:
            matches = rank(matches, card.sport)
        best = matches[0]

        price = best.price
        if price is None:
            price = await self._client.fetch_catalog_detail(best.product_id)

        logger.info(
            "catalog_best_match",
            product_id=best.product_id,
            product_name=best.product_name,
            set_name=best.set_name,
            price=str(price) if price is not None else None,
            source="catalog",
        )

        if price is not None:
            price = _quantize(price)
        if price is None or price <= _ZERO:
            raise NoData("Card found but no price data available")

        return PriceResult(
            found=True,
            price=price,
            sample_count=1,
            source=self.source,
            query=query,
            match=CatalogMatch(
                product_id=best.product_id,
                product_name=best.product_name,
                set_name=best.set_name,
            ),
        )
