"""
Card Price Resolver — Shared pytest Fixtures & Configuration

Provides common fixtures for all test modules:
- Card queries for the common request shapes
- Mock source responses loaded from tests/fixtures/
- Async test support via pytest-asyncio
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cardprice.models.card import CardQuery


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

pytest_plugins = ("pytest_asyncio",)

FIXTURES = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Card fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def hockey_base_card() -> CardQuery:
    """Base hockey rookie with a visible card number."""
    return CardQuery(
        player="Connor Bedard",
        year="2023-24",
        brand="Upper Deck",
        series="Series 1",
        sport="hockey",
        cardNumber="201",
        parallel="Base",
    )


@pytest.fixture
def basketball_prizm_card() -> CardQuery:
    """Basketball card with a requested parallel and no visible number."""
    return CardQuery(
        player="Victor Wembanyama",
        year="2023-24",
        brand="Panini",
        series="Prizm",
        sport="basketball",
        cardNumber="Not visible",
        parallel="Prizm",
    )


@pytest.fixture
def basketball_base_card() -> CardQuery:
    return CardQuery(
        player="Victor Wembanyama",
        year="2023-24",
        brand="Panini",
        series="Unknown",
        sport="basketball",
        cardNumber="Not visible",
        parallel="Base",
    )


# ---------------------------------------------------------------------------
# Fixture Loaders
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def ebay_sold_html() -> str:
    """Load a mock eBay sold search page from fixtures/ebay_sold.html."""
    return (FIXTURES / "ebay_sold.html").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def sportscardspro_products() -> dict:
    """Load a mock SportsCardsPro search response from fixtures/sportscardspro_products.json."""
    with open(FIXTURES / "sportscardspro_products.json") as f:
        return json.load(f)
