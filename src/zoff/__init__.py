"""
zoff: best-route swap quotes across Solana DEX aggregators.

Usage:
    from zoff import QuoteAggregator, Settings, SwapRequest
    from zoff.market import PriceHistoryClient
"""

from zoff.aggregator import QuoteAggregator, rank_quotes
from zoff.core.config import Settings
from zoff.core.models import Platform, PriceHistory, PricePoint, Quote, SwapRequest

__version__ = "0.1.0"
__all__ = [
    "Platform",
    "PriceHistory",
    "PricePoint",
    "Quote",
    "QuoteAggregator",
    "Settings",
    "SwapRequest",
    "rank_quotes",
]
