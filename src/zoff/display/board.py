"""
QuoteBoard: the state and rendering behind the quote dashboard.

Holds what the user can change (amount and swap direction), turns it into a
SwapRequest, and renders the ranked quotes and the price summary as text.
No ranking happens here: the "Best" row is simply the first usable quote of
the aggregator's list.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from zoff.aggregator import best_quote
from zoff.core.amounts import format_amount, to_raw_amount
from zoff.core.models import DECIMALS, DEFAULT_SLIPPAGE_BPS, MINTS, PriceHistory, Quote, SwapRequest

DEFAULT_AMOUNT = "1"


def _percent(value: str) -> str:
    try:
        return f"{float(value):.4f}%"
    except ValueError:
        return "--"


@dataclass
class QuoteBoard:
    """
    Args:
        amount:        human-readable input amount (e.g. "1.5")
        reverse:       False for SOL -> JitoSOL, True for JitoSOL -> SOL
        slippage_bps:  slippage tolerance sent with every request
    """
    amount: str = DEFAULT_AMOUNT
    reverse: bool = False
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS
    base: str = "SOL"
    target: str = "JitoSOL"
    quotes: list[Quote] = field(default_factory=list)
    history: PriceHistory | None = None

    @property
    def input_token(self) -> str:
        return self.target if self.reverse else self.base

    @property
    def output_token(self) -> str:
        return self.base if self.reverse else self.target

    def toggle_direction(self) -> None:
        self.reverse = not self.reverse
        self.quotes = []

    def set_amount(self, amount: str) -> None:
        """Change the input amount; rejects anything that is not a positive number."""
        raw = to_raw_amount(amount, DECIMALS[self.input_token])
        if raw == "0":
            raise ValueError(f"amount too small: {amount!r}")
        self.amount = amount
        self.quotes = []

    def swap_request(self) -> SwapRequest:
        return SwapRequest(
            input_mint=MINTS[self.input_token],
            output_mint=MINTS[self.output_token],
            amount=to_raw_amount(self.amount, DECIMALS[self.input_token]),
            slippage_bps=self.slippage_bps,
        )

    @property
    def best(self) -> Quote | None:
        return best_quote(self.quotes)

    def title(self) -> str:
        return f"{self.amount} {self.input_token} → {self.output_token}"

    def render_quotes(self) -> list[str]:
        if not self.quotes:
            return ["No quotes available."]

        best = self.best
        decimals = DECIMALS[self.output_token]
        lines = []
        for q in self.quotes:
            name = q.platform.value.capitalize()
            if not q.ok:
                lines.append(f"  {name:<10} Unavailable  --")
                continue
            marker = "★ Best" if q is best else ""
            amount = f"{format_amount(q.output_amount, decimals)} {self.output_token}"
            impact = f"Impact: {_percent(q.price_impact_pct)}"
            route = q.route or "-"
            lines.append(f"  {name:<10} {amount:<26} {impact:<18} {route}  {marker}".rstrip())
        return lines

    def render_price(self) -> str:
        if self.history is None:
            return f"{self.target}/USD: price history unavailable"
        sign = "+" if self.history.change_percent >= 0 else ""
        return (
            f"{self.target}/USD: ${self.history.current_price:,.2f} "
            f"({sign}{self.history.change_percent:.2f}%, {len(self.history.prices)} points)"
        )

    def render(self) -> str:
        lines = [self.render_price(), "", self.title()]
        lines.extend(self.render_quotes())
        return "\n".join(lines)
