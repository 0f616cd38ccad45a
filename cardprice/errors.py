"""
Card Price Resolver — Error taxonomy

None of these escape PriceResolver.resolve(): each one is converted into a
SourceAttempt for the slot it happened in and the resolver falls back to the
next source. MalformedCandidate never leaves the noise filter.
"""

from __future__ import annotations

from cardprice.config import AttemptOutcome


class PricingError(Exception):
    """Base class for every failure mode of the pricing pipeline."""

    outcome: AttemptOutcome = AttemptOutcome.UNAVAILABLE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SourceUnavailable(PricingError):
    """Network, timeout, auth or markup failure in a source adapter."""

    outcome = AttemptOutcome.UNAVAILABLE


class NoData(PricingError):
    """The source answered but returned nothing usable."""

    outcome = AttemptOutcome.NO_DATA


class AllFiltered(PricingError):
    """Candidates existed but none survived cleaning or matching."""

    outcome = AttemptOutcome.ALL_FILTERED


class MalformedCandidate(PricingError):
    """A single candidate could not be parsed; it is dropped, never propagated."""

    outcome = AttemptOutcome.NO_DATA
