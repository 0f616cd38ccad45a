"""
Models package — export the pricing data model.
"""

from cardprice.models.candidate import Candidate, CatalogCandidate
from cardprice.models.card import CardQuery
from cardprice.models.result import CatalogMatch, PriceRange, PriceResult, SourceAttempt

__all__ = [
    "Candidate",
    "CardQuery",
    "CatalogCandidate",
    "CatalogMatch",
    "PriceRange",
    "PriceResult",
    "SourceAttempt",
]
