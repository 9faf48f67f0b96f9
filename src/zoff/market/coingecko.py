"""
PriceHistoryClient: USD price history from the CoinGecko market-chart API.

API: https://api.coingecko.com/api/v3/coins/{id}/market_chart

Responses are kept for a short TTL per `days` window, which keeps the chart
from hammering the public API when users flip between ranges.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from decimal import Decimal

import httpx

from zoff.core.config import (
    DEFAULT_COINGECKO_COIN_ID,
    PRICE_CACHE_TTL_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
)
from zoff.core.models import PriceHistory

logger = logging.getLogger("zoff.market")

COINGECKO_API = "https://api.coingecko.com"
DEFAULT_DAYS = 7.0

# Keep error messages from carrying whole upstream pages
MAX_ERROR_BODY_CHARS = 2048

# Upper bound on cached `days` windows
MAX_CACHED_WINDOWS = 64


class PriceHistoryError(Exception):
    """Raised when CoinGecko answers with a non-success status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def format_days(days: float) -> str:
    """Render a window for the query string: 7.0 -> "7", 0.04 -> "0.04", 1e-05 -> "0.00001"."""
    value = Decimal(str(days))
    if not value.is_finite() or value <= 0:
        raise ValueError(f"days must be positive, got {days}")
    return format(value.normalize(), "f")


class PriceHistoryClient:
    """
    Fetch and summarize the price history of one asset.

    Usage:
        prices = PriceHistoryClient(client)
        history = await prices.get_history(days=1)
        print(history.current_price, history.change_percent)
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        coin_id: str = DEFAULT_COINGECKO_COIN_ID,
        api_url: str = COINGECKO_API,
        cache_ttl: float = PRICE_CACHE_TTL_SECONDS,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        max_cached: int = MAX_CACHED_WINDOWS,
    ) -> None:
        self._client = client
        self._coin_id = coin_id
        self._api = api_url.rstrip("/")
        self._cache_ttl = cache_ttl
        self._timeout = timeout
        self._max_cached = max_cached
        self._cache: OrderedDict[str, tuple[float, PriceHistory]] = OrderedDict()

    @property
    def cached_windows(self) -> int:
        return len(self._cache)

    async def get_history(self, days: float = DEFAULT_DAYS) -> PriceHistory:
        """
        Return the price series for the last `days` days (fractions allowed).

        Raises:
            PriceHistoryError: CoinGecko returned a non-2xx status
            ValueError: `days` is not positive
        """
        key = format_days(days)
        now = time.monotonic()
        cached = self._lookup(key, now)
        if cached is not None:
            return cached

        resp = await self._client.get(
            f"{self._api}/api/v3/coins/{self._coin_id}/market_chart",
            params={"vs_currency": "usd", "days": key},
            timeout=self._timeout,
        )
        if not resp.is_success:
            logger.warning(f"CoinGecko returned HTTP {resp.status_code} for days={key}")
            raise PriceHistoryError(
                f"CoinGecko error: {resp.status_code} {resp.text[:MAX_ERROR_BODY_CHARS]}",
                status_code=resp.status_code,
            )

        history = PriceHistory.from_market_chart(resp.json().get("prices") or [])
        self._store(key, now, history)
        logger.debug(f"Fetched {len(history.prices)} price points for days={key}")
        return history

    def clear_cache(self) -> None:
        self._cache.clear()

    def _lookup(self, key: str, now: float) -> PriceHistory | None:
        entry = self._cache.get(key)
        if entry is None:
            return None
        if now - entry[0] >= self._cache_ttl:
            del self._cache[key]
            return None
        self._cache.move_to_end(key)
        return entry[1]

    def _store(self, key: str, now: float, history: PriceHistory) -> None:
        if self._cache_ttl <= 0 or self._max_cached <= 0:
            return
        # Drop expired windows first, then the least recently used
        for stale in [k for k, (at, _) in self._cache.items() if now - at >= self._cache_ttl]:
            del self._cache[stale]
        while len(self._cache) >= self._max_cached:
            self._cache.popitem(last=False)
        self._cache[key] = (now, history)
