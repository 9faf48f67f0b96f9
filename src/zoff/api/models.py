from pydantic import BaseModel, Field

from zoff.core.models import PriceHistory, Quote


class QuoteResponse(BaseModel):
    """Ranked quotes for one swap request, best first."""

    quotes: list[Quote] = Field(..., description="Quotes ordered best first; failed quotes last")


class PriceResponse(PriceHistory):
    """Price history of the charted asset with its summary values."""


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx answer."""

    error: str = Field(..., description="Human-readable failure description")
