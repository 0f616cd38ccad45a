"""Tests for the eBay sold-listings client."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest
import respx

import cardprice.pipeline.ebay as ebay_module
from cardprice.errors import SourceUnavailable
from cardprice.pipeline.ebay import EbaySoldListingsClient, parse_sold_listings

EBAY_URL = "https://www.ebay.com/sch/i.html"

BLOCKED_PAGE = "<html><body><h1>Pardon Our Interruption...</h1></body></html>"
EMPTY_RESULTS_PAGE = '<html><body><div id="srp-river-results"><ul class="srp-results"></ul></div></body></html>'


# ---------------------------------------------------------------------------
# HTML parsing
# ---------------------------------------------------------------------------


class TestParseSoldListings:
    def test_every_row_extracted_in_page_order(self, ebay_sold_html: str) -> None:
        candidates = parse_sold_listings(ebay_sold_html)

        assert len(candidates) == 8
        assert candidates[0].title == "Shop on eBay"
        assert candidates[0].raw_price == "$20.00"
        assert candidates[2].title == "2023-24 Upper Deck Connor Bedard Young Guns #201 Rookie"

    def test_new_listing_prefix_stripped(self, ebay_sold_html: str) -> None:
        candidates = parse_sold_listings(ebay_sold_html)
        assert candidates[1].title == "2023-24 Upper Deck Series 1 Connor Bedard #201 Young Guns RC"
        assert candidates[1].raw_price == "$10.00"

    def test_card_layout_rows_supported(self, ebay_sold_html: str) -> None:
        row = parse_sold_listings(ebay_sold_html)[4]
        assert row.title == "2023-24 Upper Deck Young Guns Connor Bedard #201"
        assert row.raw_price == "$11.00"
        assert row.extra["listing_url"] == "https://www.ebay.com/itm/1004"

    def test_missing_price_and_link_left_empty(self, ebay_sold_html: str) -> None:
        candidates = parse_sold_listings(ebay_sold_html)
        assert candidates[-1].raw_price is None
        assert "listing_url" not in candidates[-1].extra
        assert "listing_url" not in candidates[0].extra

    def test_empty_results_container_is_not_an_error(self) -> None:
        assert parse_sold_listings(EMPTY_RESULTS_PAGE) == []

    def test_unrecognised_markup_raises(self) -> None:
        with pytest.raises(SourceUnavailable, match="markup not recognised"):
            parse_sold_listings(BLOCKED_PAGE)


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


class TestEbaySoldListingsClient:
    @pytest.mark.asyncio
    async def test_fetch_happy_path(self, ebay_sold_html: str) -> None:
        with respx.mock() as mock:
            route = mock.get(EBAY_URL).mock(
                return_value=httpx.Response(200, text=ebay_sold_html)
            )

            client = EbaySoldListingsClient()
            candidates = await client.fetch_sold_listings("2023-24 Upper Deck Connor Bedard #201")

        assert len(candidates) == 8
        assert route.called
        request = route.calls.last.request
        assert request.url.params["_nkw"] == "2023-24 Upper Deck Connor Bedard #201"
        assert request.url.params["LH_Sold"] == "1"
        assert request.url.params["LH_Complete"] == "1"
        assert request.url.params["LH_ItemCondition"] == "3000"
        assert "Mozilla" in request.headers["User-Agent"]

    @pytest.mark.asyncio
    async def test_item_condition_from_settings(self) -> None:
        with patch.object(ebay_module.settings, "EBAY_ITEM_CONDITION", "1000"), respx.mock() as mock:
            route = mock.get(EBAY_URL).mock(
                return_value=httpx.Response(200, text=EMPTY_RESULTS_PAGE)
            )
            await EbaySoldListingsClient().fetch_sold_listings("Wayne Gretzky")

        assert route.calls.last.request.url.params["LH_ItemCondition"] == "1000"

    @pytest.mark.asyncio
    async def test_custom_search_url(self) -> None:
        with respx.mock() as mock:
            route = mock.get("https://ebay.test/sch").mock(
                return_value=httpx.Response(200, text=EMPTY_RESULTS_PAGE)
            )
            result = await EbaySoldListingsClient(search_url="https://ebay.test/sch").fetch_sold_listings("x")

        assert result == []
        assert route.called

    @pytest.mark.asyncio
    async def test_http_error_raises_source_unavailable(self) -> None:
        with respx.mock() as mock:
            mock.get(EBAY_URL).mock(return_value=httpx.Response(503, text="unavailable"))

            with pytest.raises(SourceUnavailable, match="eBay request failed"):
                await EbaySoldListingsClient().fetch_sold_listings("Connor Bedard")

    @pytest.mark.asyncio
    async def test_transport_error_raises_source_unavailable(self) -> None:
        with respx.mock() as mock:
            mock.get(EBAY_URL).mock(side_effect=httpx.ConnectError("connection refused"))

            with pytest.raises(SourceUnavailable):
                await EbaySoldListingsClient().fetch_sold_listings("Connor Bedard")

    @pytest.mark.asyncio
    async def test_blocked_page_raises_source_unavailable(self) -> None:
        with respx.mock() as mock:
            mock.get(EBAY_URL).mock(return_value=httpx.Response(200, text=BLOCKED_PAGE))

            with pytest.raises(SourceUnavailable, match="markup not recognised"):
                await EbaySoldListingsClient().fetch_sold_listings("Connor Bedard")
