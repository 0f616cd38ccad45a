"""
Card Price Resolver — Pipeline output

PriceResult is the only thing the resolver hands back to its caller. The
model validator enforces the output contract:
- found  => price present, sample_count >= 1, no message,
            low <= price <= high when a range is present
- !found => no price, no range, message present
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cardprice.config import AttemptOutcome, PriceSourceName


class PriceRange(BaseModel):
    """Inclusive low/high of the sample prices behind an estimate."""

    model_config = ConfigDict(frozen=True)

    low: Decimal
    high: Decimal


class CatalogMatch(BaseModel):
    """Catalog entry a catalog-sourced price was read from."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str
    set_name: str


class SourceAttempt(BaseModel):
    """What happened when one source slot was tried."""

    model_config = ConfigDict(frozen=True)

    source: PriceSourceName
    outcome: AttemptOutcome
    message: str | None = None


class PriceResult(BaseModel):
    """Point estimate plus supporting evidence and provenance."""

    model_config = ConfigDict(frozen=True)

    found: bool
    price: Decimal | None = None
    sample_count: int = 0
    price_range: PriceRange | None = None
    source: PriceSourceName | None = None
    message: str | None = None
    query: str | None = None
    prices: list[Decimal] = Field(default_factory=list)
    match: CatalogMatch | None = None
    attempts: list[SourceAttempt] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_contract(self) -> "PriceResult":
        if self.found:
            if self.price is None:
                raise ValueError("a found result must carry a price")
            if self.sample_count < 1:
                raise ValueError("a found result needs at least one sample")
            if self.message is not None:
                raise ValueError("a found result must not carry a message")
            if self.price_range is not None and not (
                self.price_range.low <= self.price <= self.price_range.high
            ):
                raise ValueError("price must lie within price_range")
        else:
            if self.price is not None or self.price_range is not None:
                raise ValueError("a not-found result must not carry a price")
            if not self.message:
                raise ValueError("a not-found result must explain why")
        return self

    @classmethod
    def not_found(
        cls,
        message: str,
        source: PriceSourceName | None = None,
        query: str | None = None,
        attempts: list[SourceAttempt] | None = None,
    ) -> "PriceResult":
        return cls(
            found=False,
            message=message,
            source=source,
            query=query,
            attempts=attempts or [],
        )
