"""
Jupiter: quotes from the Jupiter swap aggregator.

API: https://api.jup.ag/swap/v1/quote
Route steps live under `routePlan[].swapInfo.label`.
"""

from __future__ import annotations

from typing import Any

from zoff.core.amounts import decimal_str, raw_amount
from zoff.core.models import Platform, Quote, SwapRequest
from zoff.providers.base import QuoteProvider, join_route, route_labels

JUPITER_QUOTE_URL = "https://api.jup.ag/swap/v1/quote"


class JupiterProvider(QuoteProvider):
    platform = Platform.JUPITER

    def endpoint(self) -> str:
        return JUPITER_QUOTE_URL

    def parse(self, data: dict[str, Any], request: SwapRequest) -> Quote:
        labels = route_labels(data.get("routePlan"), "swapInfo", "label")
        return Quote(
            platform=self.platform,
            input_amount=raw_amount(data.get("inAmount"), request.amount),
            output_amount=raw_amount(data.get("outAmount"), "0"),
            price_impact_pct=decimal_str(data.get("priceImpactPct")),
            route=join_route(labels),
        )
