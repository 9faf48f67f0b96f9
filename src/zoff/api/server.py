import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from zoff import __version__
from zoff.aggregator import QuoteAggregator
from zoff.api.routes import router
from zoff.core.config import Settings, configure_logging
from zoff.market.coingecko import PriceHistoryClient

logger = logging.getLogger("zoff.api")


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        settings:  configuration; read from the environment at startup when omitted
        transport: optional httpx transport for every outbound call (tests inject a mock)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Load configuration
        config = settings or Settings.from_env()
        configure_logging(config.log_level)

        if not config.dflow_api_key:
            logger.info("DFLOW_API_KEY not set; dFlow quotes disabled.")
        if not config.titan_api_url:
            logger.info("TITAN_API_URL not set; Titan quotes disabled.")

        # One pooled client shared by every provider
        client = httpx.AsyncClient(timeout=config.request_timeout, transport=transport)

        app.state.settings = config
        app.state.aggregator = QuoteAggregator.from_settings(client, config)
        app.state.price_client = PriceHistoryClient(
            client,
            coin_id=config.coingecko_coin_id,
            cache_ttl=config.price_cache_ttl,
            timeout=config.request_timeout,
        )

        yield
        await client.aclose()

    app = FastAPI(
        title="Zoff - Swap Quote API",
        description="Best-route swap quotes across Solana aggregators, plus price history",
        version=__version__,
        lifespan=lifespan,
    )

    # Allow CORS for easy frontend integration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content={"error": str(exc)},
        )

    @app.get("/health")
    async def health_check():
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn (`zoff-server`)."""
    import uvicorn

    uvicorn.run("zoff.api.server:app", host="0.0.0.0", port=8000)
