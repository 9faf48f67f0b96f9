"""
Runtime configuration, read from environment variables.

Optional providers are switched on by their settings: dFlow needs
DFLOW_API_KEY, Titan needs TITAN_API_URL. Leaving either unset simply
removes that provider from the results.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

# Every outbound call gets this timeout, no retries
REQUEST_TIMEOUT_SECONDS = 10.0
PRICE_CACHE_TTL_SECONDS = 60.0
DEFAULT_COINGECKO_COIN_ID = "jito-staked-sol"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    """
    Service configuration.

    Args:
        dflow_api_key:    API key sent to dFlow as `x-api-key`
        titan_api_url:    full quote URL of a Titan endpoint
        request_timeout:  per-request timeout in seconds for every upstream
        price_cache_ttl:  seconds a price history response stays fresh
        coingecko_coin_id: CoinGecko id of the charted asset
        log_level:        root logging level name
    """
    dflow_api_key: str | None = None
    titan_api_url: str | None = None
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    price_cache_ttl: float = PRICE_CACHE_TTL_SECONDS
    coingecko_coin_id: str = DEFAULT_COINGECKO_COIN_ID
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            dflow_api_key=os.getenv("DFLOW_API_KEY") or None,
            titan_api_url=os.getenv("TITAN_API_URL") or None,
            request_timeout=float(os.getenv("ZOFF_REQUEST_TIMEOUT", REQUEST_TIMEOUT_SECONDS)),
            price_cache_ttl=float(os.getenv("ZOFF_PRICE_CACHE_TTL", PRICE_CACHE_TTL_SECONDS)),
            coingecko_coin_id=os.getenv("ZOFF_COINGECKO_COIN_ID", DEFAULT_COINGECKO_COIN_ID),
            log_level=os.getenv("ZOFF_LOG_LEVEL", "INFO"),
        )


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.WARNING)
