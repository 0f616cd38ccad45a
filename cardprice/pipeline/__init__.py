from cardprice.pipeline.ebay import EbaySoldListingsClient
from cardprice.pipeline.resolver import NO_PRICING_MESSAGE, PriceResolver, resolve_price
from cardprice.pipeline.sources import CatalogStage, LiveListingsStage
from cardprice.pipeline.sportscardspro import SportsCardsProClient

__all__ = [
    "NO_PRICING_MESSAGE",
    "CatalogStage",
    "EbaySoldListingsClient",
    "LiveListingsStage",
    "PriceResolver",
    "SportsCardsProClient",
    "resolve_price",
]
