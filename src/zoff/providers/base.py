"""
QuoteProvider: shared request/response handling for quote adapters.

Every adapter issues one GET with a fixed timeout and turns whatever comes
back into a Quote. Nothing escapes `fetch_quote`: HTTP errors, transport
failures and unexpected payloads all become error quotes, so one bad
provider cannot sink the others.

`fetch_quote` has three outcomes:
    Quote (no error)  - a usable quote
    Quote (error)     - the provider was asked and failed
    None              - the provider is not configured and is left out
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from zoff.core.config import REQUEST_TIMEOUT_SECONDS
from zoff.core.models import Platform, Quote, SwapRequest

logger = logging.getLogger("zoff.providers")

ROUTE_SEPARATOR = " → "
UNKNOWN_VENUE = "unknown"

# Upper bound on how much of an error body we keep
MAX_ERROR_BODY_BYTES = 2048


def dig(obj: Any, *path: str | int) -> Any:
    """
    Walk nested dicts/lists, returning None as soon as a step is missing.

    Example: dig(step, "poolInfoList", 0, "poolType")
    """
    for key in path:
        if isinstance(key, int):
            if not isinstance(obj, list) or not -len(obj) <= key < len(obj):
                return None
            obj = obj[key]
        else:
            if not isinstance(obj, dict):
                return None
            obj = obj.get(key)
        if obj is None:
            return None
    return obj


def join_route(labels: list[str]) -> str:
    """Join venue labels into a route string; no labels means a direct swap."""
    return ROUTE_SEPARATOR.join(labels) or "direct"


def route_labels(steps: Any, *path: str | int) -> list[str]:
    """Extract one venue label per route step, "unknown" where a step has none."""
    if not isinstance(steps, list):
        return []
    labels = []
    for step in steps:
        label = dig(step, *path)
        labels.append(UNKNOWN_VENUE if label is None else str(label))
    return labels


class QuoteProvider(ABC):
    """
    Base class for one quote source.

    Subclasses set `platform`, implement `endpoint()` and `parse()`, and
    override `params()`, `headers()` or `is_configured` where the upstream
    needs it.
    """

    platform: Platform

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._client = client
        self._timeout = timeout

    @property
    def is_configured(self) -> bool:
        return True

    @abstractmethod
    def endpoint(self) -> str:
        """URL the quote GET goes to."""

    def params(self, request: SwapRequest) -> dict[str, str]:
        return request.to_query()

    def headers(self) -> dict[str, str]:
        return {}

    @abstractmethod
    def parse(self, data: dict[str, Any], request: SwapRequest) -> Quote:
        """Map this provider's JSON payload onto a Quote."""

    async def fetch_quote(self, request: SwapRequest) -> Quote | None:
        """
        Ask this provider for a quote.

        Returns:
            Quote, or None when the provider is not configured.
        """
        if not self.is_configured:
            return None

        try:
            async with self._client.stream(
                "GET",
                self.endpoint(),
                params=self.params(request),
                headers=self.headers(),
                timeout=self._timeout,
            ) as resp:
                if not resp.is_success:
                    body = await _read_capped(resp)
                    logger.warning(f"{self.platform.value} returned HTTP {resp.status_code}")
                    return Quote.failed(
                        self.platform, request.amount, f"HTTP {resp.status_code}: {body}"
                    )
                await resp.aread()

            data = resp.json()
            if not isinstance(data, dict):
                raise ValueError(f"unexpected {self.platform.value} payload: {type(data).__name__}")
            quote = self.parse(data, request)
            logger.debug(f"{self.platform.value} quoted {quote.output_amount} via {quote.route}")
            return quote
        except Exception as e:
            logger.warning(f"{self.platform.value} quote failed: {e!r}")
            return Quote.failed(self.platform, request.amount, str(e))


async def _read_capped(resp: httpx.Response, limit: int = MAX_ERROR_BODY_BYTES) -> str:
    """Read at most `limit` bytes of a streamed body."""
    buf = bytearray()
    async for chunk in resp.aiter_bytes():
        buf.extend(chunk)
        if len(buf) >= limit:
            break
    return bytes(buf[:limit]).decode("utf-8", errors="replace")
