"""
Market data sources.
"""
from .coingecko import PriceHistoryClient, PriceHistoryError

__all__ = [
    "PriceHistoryClient",
    "PriceHistoryError",
]
