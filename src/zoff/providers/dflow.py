"""
dFlow: quotes from the dFlow aggregator.

API: https://quote-api.dflow.net/quote (requires an `x-api-key` header)
Without an API key the provider is left out of the results entirely.
"""

from __future__ import annotations

from typing import Any

import httpx

from zoff.core.amounts import decimal_str, raw_amount
from zoff.core.config import REQUEST_TIMEOUT_SECONDS
from zoff.core.models import Platform, Quote, SwapRequest
from zoff.providers.base import QuoteProvider, join_route, route_labels

DFLOW_QUOTE_URL = "https://quote-api.dflow.net/quote"


class DflowProvider(QuoteProvider):
    platform = Platform.DFLOW

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str | None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        api_url: str = DFLOW_QUOTE_URL,
    ) -> None:
        super().__init__(client, timeout)
        self._api_key = api_key
        self._api_url = api_url

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def endpoint(self) -> str:
        return self._api_url

    def headers(self) -> dict[str, str]:
        return {"x-api-key": self._api_key or ""}

    def parse(self, data: dict[str, Any], request: SwapRequest) -> Quote:
        labels = route_labels(data.get("routePlan"), "venue")
        return Quote(
            platform=self.platform,
            input_amount=raw_amount(data.get("inAmount"), request.amount),
            output_amount=raw_amount(data.get("outAmount"), "0"),
            price_impact_pct=decimal_str(data.get("priceImpactPct")),
            route=join_route(labels),
        )
