"""
Quote providers for the aggregator.
"""
from __future__ import annotations

import httpx

from zoff.core.config import Settings
from zoff.providers.base import QuoteProvider, join_route
from zoff.providers.dflow import DflowProvider
from zoff.providers.jupiter import JupiterProvider
from zoff.providers.raydium import RaydiumProvider
from zoff.providers.titan import TitanProvider


def build_providers(client: httpx.AsyncClient, settings: Settings) -> list[QuoteProvider]:
    """All providers, in display order. Unconfigured ones are still returned and omit themselves."""
    timeout = settings.request_timeout
    return [
        JupiterProvider(client, timeout=timeout),
        RaydiumProvider(client, timeout=timeout),
        DflowProvider(client, api_key=settings.dflow_api_key, timeout=timeout),
        TitanProvider(client, api_url=settings.titan_api_url, timeout=timeout),
    ]


__all__ = [
    "DflowProvider",
    "JupiterProvider",
    "QuoteProvider",
    "RaydiumProvider",
    "TitanProvider",
    "build_providers",
    "join_route",
]
