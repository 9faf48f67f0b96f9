"""
Titan: quotes from a Titan endpoint whose URL comes from configuration.

Titan reports its route as a ready-made string. Some deployments return a
list of steps instead; those are joined like the other providers' routes.
"""

from __future__ import annotations

from typing import Any

import httpx

from zoff.core.amounts import decimal_str, raw_amount
from zoff.core.config import REQUEST_TIMEOUT_SECONDS
from zoff.core.models import Platform, Quote, SwapRequest
from zoff.providers.base import QuoteProvider, join_route, route_labels


class TitanProvider(QuoteProvider):
    platform = Platform.TITAN

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str | None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(client, timeout)
        self._api_url = api_url

    @property
    def is_configured(self) -> bool:
        return bool(self._api_url)

    def endpoint(self) -> str:
        return self._api_url or ""

    def parse(self, data: dict[str, Any], request: SwapRequest) -> Quote:
        route = data.get("route")
        if isinstance(route, list):
            route = join_route(route_labels(route, "label"))
        elif route is None:
            route = "direct"
        return Quote(
            platform=self.platform,
            input_amount=raw_amount(data.get("inAmount"), request.amount),
            output_amount=raw_amount(data.get("outAmount"), "0"),
            price_impact_pct=decimal_str(data.get("priceImpactPct")),
            route=str(route),
        )
