"""
Terminal presentation of ranked quotes and price history.
"""
from .board import QuoteBoard
from .refresh import RefreshTask

__all__ = [
    "QuoteBoard",
    "RefreshTask",
]
