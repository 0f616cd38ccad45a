"""
Card Price Resolver — eBay Sold Listings Client (live-listings source)

Fetches the completed/sold search results page for a query and extracts raw
title + price text for every result row. No cleaning happens here: the noise
filter decides what is usable.

One httpx.AsyncClient per call, closed on every exit path. No retries: a
failed fetch raises SourceUnavailable and the resolver falls back.
"""

from __future__ import annotations

import httpx
import structlog
from bs4 import BeautifulSoup

from cardprice.config import PriceSourceName, settings
from cardprice.errors import SourceUnavailable
from cardprice.models.candidate import Candidate

logger = structlog.get_logger(__name__)

_ITEM_SELECTOR = "li.s-item, li.s-card"
_TITLE_SELECTOR = ".s-item__title, .s-card__title"
_PRICE_SELECTOR = ".s-item__price, .s-card__price"
_LINK_SELECTOR = ".s-item__link, .su-link"
_RESULTS_SELECTOR = "#srp-river-results, .srp-results"
_NEW_LISTING_PREFIX = "new listing"


def _clean_title(text: str) -> str:
    title = " ".join(text.split())
    if title.lower().startswith(_NEW_LISTING_PREFIX):
        title = title[len(_NEW_LISTING_PREFIX):].strip()
    return title


def parse_sold_listings(html: str) -> list[Candidate]:
    """
    Extract raw sold-listing rows from an eBay search results page.

    Args:
        html: Page HTML.

    Returns:
        One Candidate per result row, in page order.

    Raises:
        SourceUnavailable: If the page has neither result rows nor a results
            container (blocked page or changed markup).
    """
    soup = BeautifulSoup(html, "lxml")
    items = soup.select(_ITEM_SELECTOR)

    if not items and soup.select_one(_RESULTS_SELECTOR) is None:
        raise SourceUnavailable("eBay results markup not recognised")

    candidates: list[Candidate] = []
    for item in items:
        title_el = item.select_one(_TITLE_SELECTOR)
        price_el = item.select_one(_PRICE_SELECTOR)
        link_el = item.select_one(_LINK_SELECTOR)

        extra = {}
        if link_el is not None and link_el.get("href"):
            extra["listing_url"] = link_el.get("href")

        candidates.append(
            Candidate(
                title=_clean_title(title_el.get_text(" ", strip=True)) if title_el else "",
                raw_price=price_el.get_text(" ", strip=True) if price_el else None,
                extra=extra,
            )
        )
    return candidates


class EbaySoldListingsClient:
    """
    Live-listings source backed by eBay's sold search page.

    Usage:
        client = EbaySoldListingsClient()
        candidates = await client.fetch_sold_listings("2023-24 Upper Deck Connor Bedard #201")
    """

    name = PriceSourceName.LIVE_LISTINGS

    def __init__(
        self,
        search_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._search_url = search_url or settings.EBAY_SOLD_SEARCH_URL
        self._user_agent = user_agent or settings.SCRAPER_USER_AGENT
        self._timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS

    def _params(self, query: str) -> dict[str, str]:
        return {
            "_from": "R40",
            "_nkw": query,
            "_sacat": "0",
            "LH_Sold": "1",
            "LH_Complete": "1",
            "rt": "nc",
            "LH_ItemCondition": settings.EBAY_ITEM_CONDITION,
        }

    async def fetch_sold_listings(self, query: str) -> list[Candidate]:
        """
        Fetch sold listings matching a query.

        Returns:
            Raw candidates, possibly empty.

        Raises:
            SourceUnavailable: On transport/HTTP errors or unrecognised markup.
        """
        logger.info("ebay_fetch_sold_listings", query=query, source="ebay")

        try:
            async with httpx.AsyncClient(
                headers={"User-Agent": self._user_agent},
                timeout=self._timeout,
                follow_redirects=True,
            ) as client:
                response = await client.get(self._search_url, params=self._params(query))
                response.raise_for_status()
                html = response.text
        except httpx.HTTPError as e:
            logger.error(
                "ebay_fetch_failed",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
                source="ebay",
            )
            raise SourceUnavailable(f"eBay request failed: {e}") from e

        candidates = parse_sold_listings(html)
        logger.info(
            "ebay_fetch_sold_listings_complete",
            query=query,
            raw_count=len(candidates),
            source="ebay",
        )
        return candidates
