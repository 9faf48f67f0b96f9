"""
Raydium: quotes from the Raydium trade API.

API: https://transaction-v1.raydium.io/compute/swap-base-in

The payload is wrapped in an envelope: {"success": bool, "msg": ..., "data": {...}}.
Route steps carry their venue as `routePlan[].poolInfoList[0].poolType`, and
`priceImpactPct` is a JSON number rather than a string.
"""

from __future__ import annotations

from typing import Any

from zoff.core.amounts import decimal_str, raw_amount
from zoff.core.models import Platform, Quote, SwapRequest
from zoff.providers.base import QuoteProvider, join_route, route_labels

RAYDIUM_QUOTE_URL = "https://transaction-v1.raydium.io/compute/swap-base-in"
RAYDIUM_TX_VERSION = "V0"


class RaydiumProvider(QuoteProvider):
    platform = Platform.RAYDIUM

    def endpoint(self) -> str:
        return RAYDIUM_QUOTE_URL

    def params(self, request: SwapRequest) -> dict[str, str]:
        params = request.to_query()
        params["txVersion"] = RAYDIUM_TX_VERSION
        return params

    def parse(self, data: dict[str, Any], request: SwapRequest) -> Quote:
        if data.get("success") is False:
            return Quote.failed(
                self.platform, request.amount, f"Raydium error: {data.get('msg') or 'request rejected'}"
            )

        body = data.get("data")
        if not isinstance(body, dict):
            body = {}
        labels = route_labels(body.get("routePlan"), "poolInfoList", 0, "poolType")
        return Quote(
            platform=self.platform,
            input_amount=raw_amount(body.get("inputAmount"), request.amount),
            output_amount=raw_amount(body.get("outputAmount"), "0"),
            price_impact_pct=decimal_str(body.get("priceImpactPct")),
            route=join_route(labels),
        )
