"""
Core module: data models, amount helpers and configuration.
"""

from zoff.core.amounts import format_amount, to_raw_amount
from zoff.core.config import Settings, configure_logging
from zoff.core.models import (
    DECIMALS,
    MINTS,
    Platform,
    PriceHistory,
    PricePoint,
    Quote,
    SwapRequest,
)

__all__ = [
    "DECIMALS",
    "MINTS",
    "Platform",
    "PriceHistory",
    "PricePoint",
    "Quote",
    "Settings",
    "SwapRequest",
    "configure_logging",
    "format_amount",
    "to_raw_amount",
]
