"""
Card Price Resolver — Resolution Orchestrator

Tries the configured stages in priority order and stops at the first one that
produces a price. Default order:
1. Live listings (current realized sale prices, PRIMARY)
2. Catalog (slower-moving reference price, FALLBACK)

Every failure of a stage (no data, everything filtered, HTTP error, timeout)
is recorded as a SourceAttempt and triggers the next stage. No stage is
retried. Nothing raised by a stage escapes resolve().
"""

from __future__ import annotations

import asyncio

import structlog

from cardprice.config import AttemptOutcome, settings
from cardprice.errors import PricingError
from cardprice.models.card import CardQuery
from cardprice.models.result import PriceResult, SourceAttempt
from cardprice.pipeline.ebay import EbaySoldListingsClient
from cardprice.pipeline.sources import CatalogStage, LiveListingsStage, ResolutionStage
from cardprice.pipeline.sportscardspro import SportsCardsProClient

logger = structlog.get_logger(__name__)

NO_PRICING_MESSAGE = "no pricing available from any source"


class PriceResolver:
    """
    Runs the source fallback chain for one card.

    Usage:
        resolver = PriceResolver.default()
        result = await resolver.resolve(card)
    """

    def __init__(
        self,
        stages: list[ResolutionStage],
        timeout_seconds: float | None = None,
    ) -> None:
        self._stages = list(stages)
        self._timeout = (
            timeout_seconds if timeout_seconds is not None else settings.SOURCE_TIMEOUT_SECONDS
        )

    @classmethod
    def default(cls) -> "PriceResolver":
        """Live listings first, catalog second, configured from settings."""
        return cls([
            LiveListingsStage(EbaySoldListingsClient()),
            CatalogStage(SportsCardsProClient()),
        ])

    async def _attempt(self, stage: ResolutionStage, card: CardQuery) -> tuple[PriceResult | None, SourceAttempt]:
        source = stage.source
        try:
            result = await asyncio.wait_for(stage.run(card), timeout=self._timeout)
        except asyncio.TimeoutError:
            message = f"{source.value} timed out after {self._timeout:g}s"
            return None, SourceAttempt(source=source, outcome=AttemptOutcome.UNAVAILABLE, message=message)
        except PricingError as e:
            return None, SourceAttempt(source=source, outcome=e.outcome, message=e.message)
        except Exception as e:
            logger.error(
                "resolver_stage_crashed",
                stage=source.value,
                error=str(e),
                error_type=type(e).__name__,
                source="resolver",
            )
            message = f"{source.value} failed: {type(e).__name__}"
            return None, SourceAttempt(source=source, outcome=AttemptOutcome.UNAVAILABLE, message=message)

        return result, SourceAttempt(source=source, outcome=AttemptOutcome.SUCCESS)

    async def resolve(self, card: CardQuery) -> PriceResult:
        """
        Resolve a price for a card.

        Args:
            card: Normalized card attributes.

        Returns:
            The first successful PriceResult, or a not-found result carrying
            NO_PRICING_MESSAGE when every stage failed. attempts lists what
            happened in each slot that was tried.
        """
        attempts: list[SourceAttempt] = []

        for stage in self._stages:
            logger.info("resolver_trying_source", stage=stage.source.value, player=card.player, source="resolver")
            result, attempt = await self._attempt(stage, card)
            attempts.append(attempt)

            if result is not None:
                logger.info(
                    "resolver_success",
                    stage=stage.source.value,
                    price=str(result.price),
                    sample_count=result.sample_count,
                    source="resolver",
                )
                return result.model_copy(update={"attempts": attempts})

            logger.warning(
                "resolver_stage_failed",
                stage=stage.source.value,
                outcome=attempt.outcome.value,
                reason=attempt.message,
                source="resolver",
            )

        logger.warning(
            "resolver_all_sources_failed",
            player=card.player,
            attempts=[a.outcome.value for a in attempts],
            source="resolver",
        )
        return PriceResult.not_found(NO_PRICING_MESSAGE, attempts=attempts)


async def resolve_price(card: CardQuery) -> PriceResult:
    """Resolve a price with the default source chain."""
    return await PriceResolver.default().resolve(card)
