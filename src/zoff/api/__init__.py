"""
API module for zoff.

Provides the FastAPI application exposing ranked swap quotes and price history.
"""

from zoff.api.models import ErrorResponse, PriceResponse, QuoteResponse

__all__ = [
    "ErrorResponse",
    "PriceResponse",
    "QuoteResponse",
]
