"""Raw data points returned by the external price sources."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Candidate(BaseModel):
    """One sold listing before cleaning. raw_price is kept as the source text."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    raw_price: str | Decimal | None = None
    extra: dict[str, Any] = Field(default_factory=dict)


class CatalogCandidate(BaseModel):
    """One pricing-catalog product row, price already converted to dollars."""

    model_config = ConfigDict(frozen=True)

    product_id: str = ""
    product_name: str = ""
    set_name: str = ""
    price: Decimal | None = Field(default=None, description="Ungraded price in USD")
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def combined_text(self) -> str:
        """Lower-cased product name + set name, the text all matching runs on."""
        return f"{self.product_name} {self.set_name}".lower()
