"""
QuoteAggregator: fans a swap request out to every provider and ranks the answers.

Usage:
    async with httpx.AsyncClient() as client:
        aggregator = QuoteAggregator.from_settings(client, Settings.from_env())
        quotes = await aggregator.get_quotes(request)
        best = quotes[0] if quotes and quotes[0].ok else None
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from zoff.core.config import Settings
from zoff.core.models import Quote, SwapRequest
from zoff.providers import QuoteProvider, build_providers

logger = logging.getLogger("zoff.aggregator")


def rank_quotes(quotes: list[Quote]) -> list[Quote]:
    """
    Order quotes best first.

    Usable quotes come first, by output amount descending (exact integer
    comparison). Failed quotes follow in provider order.
    """
    return sorted(quotes, key=lambda q: (0, -q.output_value) if q.ok else (1, 0))


def best_quote(quotes: list[Quote]) -> Quote | None:
    """First usable quote of an already ranked list."""
    return next((q for q in quotes if q.ok), None)


class QuoteAggregator:
    """Queries all configured providers concurrently and ranks the results."""

    def __init__(self, providers: list[QuoteProvider]) -> None:
        self._providers = providers

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient, settings: Settings) -> QuoteAggregator:
        return cls(build_providers(client, settings))

    @property
    def providers(self) -> list[QuoteProvider]:
        return list(self._providers)

    async def get_quotes(self, request: SwapRequest) -> list[Quote]:
        """
        Fetch one quote per provider and return them ranked.

        Every provider runs to completion; none is cancelled because another
        finished or failed. Unconfigured providers are dropped. Never raises
        for provider failures.
        """
        results = await asyncio.gather(
            *(p.fetch_quote(request) for p in self._providers),
            return_exceptions=True,
        )

        quotes: list[Quote] = []
        for provider, result in zip(self._providers, results):
            if result is None:
                continue
            if isinstance(result, Exception):
                logger.error(f"{provider.platform.value} fetcher raised: {result!r}")
                result = Quote.failed(provider.platform, request.amount, str(result))
            elif isinstance(result, BaseException):
                raise result
            quotes.append(result)

        ranked = rank_quotes(quotes)
        best = best_quote(ranked)
        logger.info(
            f"{len(ranked)} quotes for {request.amount} {request.input_mint[:6]}.."
            f" -> {request.output_mint[:6]}..; best: {best.platform.value if best else 'none'}"
        )
        return ranked
