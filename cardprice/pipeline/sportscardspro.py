"""
Card Price Resolver — SportsCardsPro API Client (catalog source)

Searches the SportsCardsPro product catalog and converts rows into
CatalogCandidate. The API reports prices in pennies with kebab-case keys
("product-name", "console-name", "loose-price"); both are translated here so
the rest of the pipeline only ever sees dollars and snake_case.

Endpoints:
    GET /products?q={query}&t={token}   search (prices inline)
    GET /product?id={id}&t={token}      single product detail
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

import httpx
import structlog
from pydantic import AliasChoices, BaseModel, Field, field_validator

from cardprice.config import PriceSourceName, settings
from cardprice.errors import SourceUnavailable
from cardprice.models.candidate import CatalogCandidate

logger = structlog.get_logger(__name__)

_HUNDRED = Decimal("100")
_TWO_DP = Decimal("0.01")


# ---------------------------------------------------------------------------
# Pydantic Response Models
# ---------------------------------------------------------------------------


class SportsCardsProProduct(BaseModel):
    """One product row from the SportsCardsPro API."""

    id: str = Field(default="")
    product_name: str = Field(
        default="", validation_alias=AliasChoices("product-name", "product_name")
    )
    console_name: str = Field(
        default="",
        validation_alias=AliasChoices("console-name", "console_name", "set_name"),
    )
    loose_price_pennies: Decimal | None = Field(
        default=None, validation_alias=AliasChoices("loose-price", "loose_price")
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("product_name", "console_name", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("loose_price_pennies", mode="before")
    @classmethod
    def parse_pennies(cls, v: Any) -> Decimal | None:
        """Safely convert price values to Decimal. Never use float for money."""
        if v is None or v == "" or isinstance(v, bool):
            return None
        try:
            return Decimal(str(v))
        except (InvalidOperation, ValueError):
            return None

    @property
    def loose_price(self) -> Decimal | None:
        """Ungraded price in dollars, None when missing or zero."""
        if self.loose_price_pennies is None or self.loose_price_pennies <= 0:
            return None
        return (self.loose_price_pennies / _HUNDRED).quantize(_TWO_DP, rounding=ROUND_HALF_UP)

    def to_candidate(self) -> CatalogCandidate:
        return CatalogCandidate(
            product_id=self.id,
            product_name=self.product_name,
            set_name=self.console_name,
            price=self.loose_price,
        )


# ---------------------------------------------------------------------------
# API Client
# ---------------------------------------------------------------------------


class SportsCardsProClient:
    """
    Catalog source backed by the SportsCardsPro API.

    Usage:
        client = SportsCardsProClient()
        candidates = await client.search_catalog("2023-24 Upper Deck Connor Bedard")
        price = await client.fetch_catalog_detail(candidates[0].product_id)
    """

    name = PriceSourceName.CATALOG

    def __init__(
        self,
        api_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._api_token = api_token if api_token is not None else settings.SPORTSCARDSPRO_API_TOKEN
        self._base_url = base_url or settings.SPORTSCARDSPRO_BASE_URL
        self._timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS

    async def _get(self, path: str, params: dict[str, str]) -> Any:
        if not self._api_token:
            logger.warning("sportscardspro_skipped_no_token", path=path, source="sportscardspro")
            raise SourceUnavailable("SportsCardsPro API token not configured")

        try:
            async with httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout) as client:
                response = await client.get(path, params={**params, "t": self._api_token})
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            logger.error(
                "sportscardspro_request_failed",
                path=path,
                error=str(e),
                error_type=type(e).__name__,
                source="sportscardspro",
            )
            raise SourceUnavailable(f"SportsCardsPro API error: {e}") from e
        except ValueError as e:
            logger.error(
                "sportscardspro_invalid_json",
                path=path,
                error=str(e),
                source="sportscardspro",
            )
            raise SourceUnavailable("Invalid API response") from e

    async def search_catalog(self, query: str) -> list[CatalogCandidate]:
        """
        Search products by free text.

        Returns:
            Catalog candidates in API order (prices in dollars).

        Raises:
            SourceUnavailable: On missing token, HTTP errors, or an unexpected payload.
        """
        logger.info("sportscardspro_search", query=query, source="sportscardspro")

        data = await self._get("/products", {"q": query})
        rows = data.get("products") if isinstance(data, dict) else data
        if not isinstance(rows, list):
            logger.error("sportscardspro_invalid_response", query=query, source="sportscardspro")
            raise SourceUnavailable("Invalid API response")

        candidates: list[CatalogCandidate] = []
        for row in rows:
            try:
                candidates.append(SportsCardsProProduct.model_validate(row).to_candidate())
            except Exception as e:
                logger.warning(
                    "sportscardspro_parse_error",
                    error=str(e),
                    source="sportscardspro",
                )

        logger.info(
            "sportscardspro_search_complete",
            query=query,
            results_count=len(candidates),
            source="sportscardspro",
        )
        return candidates

    async def fetch_catalog_detail(self, product_id: str) -> Decimal | None:
        """
        Fetch the ungraded price for one product.

        Returns:
            Price in dollars, or None when the product has no price data.
        """
        logger.info("sportscardspro_fetch_detail", product_id=product_id, source="sportscardspro")

        data = await self._get("/product", {"id": product_id})
        if not isinstance(data, dict) or data.get("status") == "error":
            return None
        return SportsCardsProProduct.model_validate(data).loose_price
