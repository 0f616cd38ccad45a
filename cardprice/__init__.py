"""Card Price Resolver — fair-market pricing for raw trading cards."""

__version__ = "0.1.0"
