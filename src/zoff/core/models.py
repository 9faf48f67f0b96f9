"""
Core data models for swap quotes and price history.
All token amounts are smallest-unit integers carried as decimal strings.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from zoff.core.amounts import is_raw_amount

# Well-known mints on Solana mainnet
MINTS = {
    "SOL": "So11111111111111111111111111111111111111112",
    "JitoSOL": "J1toso1uCk3RLmjorhTtrVwY9HJ7X8V9yYac6Y7kGCPn",
}

# Token decimal places
DECIMALS = {
    "SOL": 9,
    "JitoSOL": 9,
}

DEFAULT_SLIPPAGE_BPS = 50
MAX_SLIPPAGE_BPS = 10_000


class Platform(str, Enum):
    """Quote providers known to the aggregator."""
    JUPITER = "jupiter"
    RAYDIUM = "raydium"
    DFLOW = "dflow"
    TITAN = "titan"


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Quote(CamelModel):
    """
    One provider's normalized answer to one swap request.

    A quote is either a real quote (no `error`) or a failed one whose numeric
    fields are zeroed and whose route is empty. Failed quotes are still shown
    to the user but always rank last.
    """

    platform: Platform
    input_amount: str
    output_amount: str = "0"
    price_impact_pct: str = "0"
    route: str = ""
    error: str | None = None

    @field_validator("input_amount", "output_amount")
    @classmethod
    def _check_amount(cls, value: str) -> str:
        if not is_raw_amount(value):
            raise ValueError(f"amount must be a non-negative integer string, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_error_shape(self) -> Quote:
        if self.error is not None:
            if self.output_amount != "0" or self.price_impact_pct != "0" or self.route:
                raise ValueError("failed quotes must carry zeroed amounts and an empty route")
        return self

    @classmethod
    def failed(cls, platform: Platform, input_amount: str, error: str) -> Quote:
        """Build an error quote for `platform`."""
        return cls(
            platform=platform,
            input_amount=input_amount,
            output_amount="0",
            price_impact_pct="0",
            route="",
            error=error or "Unknown error",
        )

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def output_value(self) -> int:
        """Output amount as an exact integer (used for ranking)."""
        return int(self.output_amount)


class SwapRequest(CamelModel):
    """A single quote query. Built per refresh and thrown away afterwards."""

    input_mint: str = Field(..., min_length=1)
    output_mint: str = Field(..., min_length=1)
    amount: str
    slippage_bps: int = Field(DEFAULT_SLIPPAGE_BPS, ge=0, le=MAX_SLIPPAGE_BPS)

    @field_validator("amount")
    @classmethod
    def _check_amount(cls, value: str) -> str:
        if not is_raw_amount(value) or int(value) == 0:
            raise ValueError("amount must be a positive integer in the token's smallest unit")
        return value

    def to_query(self) -> dict[str, str]:
        """Query parameters shared by every provider."""
        return {
            "inputMint": self.input_mint,
            "outputMint": self.output_mint,
            "amount": self.amount,
            "slippageBps": str(self.slippage_bps),
        }

    def reversed(self) -> SwapRequest:
        """Same amount and slippage, opposite direction."""
        return self.model_copy(
            update={"input_mint": self.output_mint, "output_mint": self.input_mint}
        )


class PricePoint(BaseModel):
    """One USD price sample."""
    time: int  # unix seconds
    value: float


class PriceHistory(CamelModel):
    """A chronological price series with its derived summary values."""

    prices: list[PricePoint] = Field(default_factory=list)
    current_price: float = 0.0
    change_percent: float = 0.0

    @classmethod
    def from_market_chart(cls, pairs: list[list[float]]) -> PriceHistory:
        """
        Build a history from CoinGecko `[timestamp_ms, price]` pairs.

        `changePercent` is the move from the first to the last sample, and is
        0 when the series is empty or starts at a non-positive price.
        """
        prices = [PricePoint(time=int(ts) // 1000, value=float(price)) for ts, price in pairs]
        if not prices:
            return cls()

        first = prices[0].value
        last = prices[-1].value
        change = (last - first) / first * 100 if first > 0 else 0.0
        return cls(prices=prices, current_price=last, change_percent=change)
