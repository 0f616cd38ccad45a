"""Tests for the pricing data model (CardQuery normalization, PriceResult contract)."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from cardprice.config import PriceSourceName, Sport
from cardprice.models.candidate import CatalogCandidate
from cardprice.models.card import CardQuery
from cardprice.models.result import PriceRange, PriceResult


class TestCardQuery:
    def test_sentinels_become_none(self) -> None:
        card = CardQuery(
            player="Connor Bedard",
            year="unknown",
            brand="UNKNOWN",
            series="  ",
            cardNumber="Not visible",
            parallel="Base",
        )
        assert card.year is None
        assert card.brand is None
        assert card.series is None
        assert card.card_number is None
        assert card.parallel is None
        assert card.wants_base is True

    def test_camel_and_snake_case_card_number(self) -> None:
        assert CardQuery(player="A", cardNumber="12").card_number == "12"
        assert CardQuery(player="A", card_number="12").card_number == "12"

    def test_leading_hash_stripped_from_card_number(self) -> None:
        assert CardQuery(player="A", card_number="#201").card_number == "201"

    def test_parallel_kept_when_not_base(self) -> None:
        card = CardQuery(player="A", parallel=" Silver Prizm ")
        assert card.parallel == "Silver Prizm"
        assert card.wants_base is False

    def test_sport_normalized(self) -> None:
        assert CardQuery(player="A", sport="Hockey").sport == Sport.HOCKEY
        assert CardQuery(player="A", sport="cricket").sport == Sport.OTHER
        assert CardQuery(player="A", sport=None).sport == Sport.OTHER

    @pytest.mark.parametrize("player", ["", "   ", "Unknown", None])
    def test_player_required(self, player: str | None) -> None:
        with pytest.raises(ValidationError):
            CardQuery(player=player)

    def test_frozen(self) -> None:
        card = CardQuery(player="A")
        with pytest.raises(ValidationError):
            card.player = "B"  # type: ignore[misc]


def test_catalog_candidate_combined_text() -> None:
    row = CatalogCandidate(product_name="Connor Bedard #201", set_name="Hockey Cards 2023-24 Upper Deck")
    assert row.combined_text == "connor bedard #201 hockey cards 2023-24 upper deck"


class TestPriceResultContract:
    def test_found_result(self) -> None:
        result = PriceResult(
            found=True,
            price=Decimal("11.00"),
            sample_count=3,
            price_range=PriceRange(low=Decimal("10"), high=Decimal("12")),
            source=PriceSourceName.LIVE_LISTINGS,
        )
        assert result.found is True

    def test_found_requires_sample(self) -> None:
        with pytest.raises(ValidationError, match="at least one sample"):
            PriceResult(found=True, price=Decimal("5"), sample_count=0)

    def test_price_must_be_in_range(self) -> None:
        with pytest.raises(ValidationError, match="within price_range"):
            PriceResult(
                found=True,
                price=Decimal("20"),
                sample_count=2,
                price_range=PriceRange(low=Decimal("10"), high=Decimal("12")),
            )

    def test_not_found_requires_message(self) -> None:
        with pytest.raises(ValidationError, match="explain why"):
            PriceResult(found=False)

    def test_not_found_cannot_carry_price(self) -> None:
        with pytest.raises(ValidationError):
            PriceResult(found=False, price=Decimal("1"), message="x")

    def test_not_found_helper(self) -> None:
        result = PriceResult.not_found("nothing")
        assert result.found is False
        assert result.price is None
        assert result.message == "nothing"
