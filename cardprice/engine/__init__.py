from cardprice.engine.matcher import filter_catalog
from cardprice.engine.noise import filter_listings, parse_price
from cardprice.engine.outliers import PriceSummary, summarize
from cardprice.engine.query import build_catalog_query, build_query
from cardprice.engine.ranker import is_hockey_flagship, rank

__all__ = [
    "PriceSummary",
    "build_catalog_query",
    "build_query",
    "filter_catalog",
    "filter_listings",
    "is_hockey_flagship",
    "parse_price",
    "rank",
    "summarize",
]
