"""
Card Price Resolver — Configuration & Constants

Every threshold, sentinel and keyword list used by the pricing engine lives
here. No hardcoded values in business logic: the keyword sets are data and can
be overridden through the environment (JSON lists) without touching the
matching or ranking code.

Usage:
    from cardprice.config import settings
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic_settings import BaseSettings


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Sport(str, Enum):
    """Sports recognised by the matcher and ranker."""
    HOCKEY = "hockey"
    BASKETBALL = "basketball"
    BASEBALL = "baseball"
    FOOTBALL = "football"
    SOCCER = "soccer"
    OTHER = "other"


class PriceSourceName(str, Enum):
    """Provenance of a resolved price."""
    LIVE_LISTINGS = "live-listings"
    CATALOG = "catalog"


class AttemptOutcome(str, Enum):
    """Outcome of one source slot during a resolution."""
    SUCCESS = "success"
    NO_DATA = "no_data"
    ALL_FILTERED = "all_filtered"
    UNAVAILABLE = "unavailable"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Central configuration for the card price resolver.

    Loads from environment variables with fallback defaults.
    """

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # -----------------------------------------------------------------------
    # Catalog source: SportsCardsPro
    # -----------------------------------------------------------------------
    SPORTSCARDSPRO_API_TOKEN: str = ""
    SPORTSCARDSPRO_BASE_URL: str = "https://www.sportscardspro.com/api"

    # -----------------------------------------------------------------------
    # Live-listings source: eBay completed/sold search
    # -----------------------------------------------------------------------
    EBAY_SOLD_SEARCH_URL: str = "https://www.ebay.com/sch/i.html"
    EBAY_ITEM_CONDITION: str = "3000"       # "Used": raw cards are listed as used
    SCRAPER_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # -----------------------------------------------------------------------
    # Orchestration
    # A timeout is treated exactly like an empty source (fallback, no retry)
    # -----------------------------------------------------------------------
    SOURCE_TIMEOUT_SECONDS: float = 20.0
    HTTP_TIMEOUT_SECONDS: float = 15.0

    # -----------------------------------------------------------------------
    # Noise filter: plausibility band for a single raw card (inclusive)
    # -----------------------------------------------------------------------
    MIN_LISTING_PRICE: Decimal = Decimal("0.50")
    MAX_LISTING_PRICE: Decimal = Decimal("10000")

    # -----------------------------------------------------------------------
    # Outlier filter: Tukey fence
    # -----------------------------------------------------------------------
    IQR_FENCE_MULTIPLIER: Decimal = Decimal("1.5")

    # -----------------------------------------------------------------------
    # Sentinels emitted by the attribute extraction step
    # -----------------------------------------------------------------------
    UNKNOWN_SENTINELS: list[str] = ["unknown", "n/a", "none", "null"]
    CARD_NUMBER_ABSENT_SENTINEL: str = "not visible"
    BASE_PARALLEL_SENTINEL: str = "base"

    # -----------------------------------------------------------------------
    # Keyword sets (bump KEYWORD_CONFIG_VERSION whenever a list changes)
    # -----------------------------------------------------------------------
    KEYWORD_CONFIG_VERSION: str = "1"

    GRADING_TERMS: list[str] = [
        "psa", "bgs", "sgc", "cgc", "graded", "gem", "mint 10", "bccg", "hga", "slab",
    ]
    PLACEHOLDER_TITLES: list[str] = ["shop on ebay"]
    SPONSORED_PHRASES: list[str] = ["shop on ", "sponsored"]

    VARIANT_KEYWORDS: list[str] = [
        "prizm", "chrome", "refractor", "mosaic", "optic", "select",
        "holo", "foil", "rainbow", "parallel", "numbered", "auto",
        "autograph", "patch", "jersey", "memorabilia", "rookie ticket",
        "silver", "gold", "black", "red", "blue", "green", "orange",
        "purple", "pink", "insert", "jumbo", "variation", "sp", "ssp",
        "short print", "update", "opening day", "now", "canvas", "artist proof",
    ]
    DEPRIORITIZE_KEYWORDS: list[str] = [
        "now", "chrome", "select", "prizm", "optic", "mosaic", "update", "opening day",
    ]
    EXCLUDED_PRODUCT_TERMS: list[str] = ["oversized"]

    # Sports whose catalog set names reliably carry the sport word
    SPORT_REQUIRED_TERMS: dict[str, str] = {
        "hockey": "hockey",
        "basketball": "basketball",
    }
    BASE_SET_RANKED_SPORTS: list[str] = ["basketball", "baseball"]
    HOCKEY_FLAGSHIP_SET_PATTERN: str = r"^hockey cards \d{4}(-\d{2})? upper deck$"
    YOUNG_GUNS_TERM: str = "young guns"

    # -----------------------------------------------------------------------
    # Logging
    # -----------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"


# Singleton instance
settings = Settings()
