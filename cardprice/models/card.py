"""
Card Price Resolver — Card attributes

The resolved attributes of the physical card to price, as produced by the
attribute extraction step. Sentinel strings ("Unknown", "Not visible",
"Base") are normalized to None at construction so nothing downstream ever
sees them as literal text.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cardprice.config import Sport, settings


def _is_unknown(value: str) -> bool:
    return value.lower() in {s.lower() for s in settings.UNKNOWN_SENTINELS}


def _clean_optional(value: Any) -> str | None:
    """Strip a free-form field and collapse empty/unknown values to None."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or _is_unknown(text):
        return None
    return text


class CardQuery(BaseModel):
    """Structured attributes of the card being priced."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player: str = Field(..., description="Player name (required)")
    year: str | None = Field(default=None, description="Season label, e.g. '2024-25'")
    brand: str | None = Field(default=None, description="Manufacturer, e.g. 'Upper Deck'")
    series: str | None = Field(default=None, description="Product line, e.g. 'Series 1'")
    sport: Sport = Field(default=Sport.OTHER)
    card_number: str | None = Field(default=None, alias="cardNumber")
    parallel: str | None = Field(default=None, description="None means the base card")

    @field_validator("player", mode="before")
    @classmethod
    def require_player(cls, v: Any) -> str:
        text = str(v).strip() if v is not None else ""
        if not text or _is_unknown(text):
            raise ValueError("player must be a non-empty name")
        return text

    @field_validator("year", "brand", "series", mode="before")
    @classmethod
    def normalize_optional(cls, v: Any) -> str | None:
        return _clean_optional(v)

    @field_validator("sport", mode="before")
    @classmethod
    def normalize_sport(cls, v: Any) -> Sport:
        if isinstance(v, Sport):
            return v
        text = str(v or "").strip().lower()
        try:
            return Sport(text)
        except ValueError:
            return Sport.OTHER

    @field_validator("card_number", mode="before")
    @classmethod
    def normalize_card_number(cls, v: Any) -> str | None:
        text = _clean_optional(v)
        if text is None or text.lower() == settings.CARD_NUMBER_ABSENT_SENTINEL.lower():
            return None
        return text.lstrip("#").strip() or None

    @field_validator("parallel", mode="before")
    @classmethod
    def normalize_parallel(cls, v: Any) -> str | None:
        text = _clean_optional(v)
        if text is None or text.lower() == settings.BASE_PARALLEL_SENTINEL.lower():
            return None
        return text

    @property
    def wants_base(self) -> bool:
        """True when no parallel/variant was requested."""
        return self.parallel is None
