import logging
import math

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from zoff.aggregator import QuoteAggregator
from zoff.api.models import ErrorResponse, PriceResponse, QuoteResponse
from zoff.core.models import DEFAULT_SLIPPAGE_BPS, SwapRequest
from zoff.market.coingecko import DEFAULT_DAYS, PriceHistoryClient, PriceHistoryError

logger = logging.getLogger("zoff.api")

router = APIRouter(prefix="/api", tags=["Quotes"])

MISSING_PARAMS_MESSAGE = "Missing required params: inputMint, outputMint, amount"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _query_name(loc: str | int) -> str:
    """Map a SwapRequest field name onto the query parameter clients send."""
    info = SwapRequest.model_fields.get(str(loc))
    if info is not None and info.alias:
        return info.alias
    return str(loc)


def get_aggregator(request: Request) -> QuoteAggregator:
    """Retrieve the QuoteAggregator created in the app lifespan."""
    aggregator = getattr(request.app.state, "aggregator", None)
    if not aggregator:
        raise HTTPException(status_code=500, detail="quote aggregator not initialized")
    return aggregator


def get_price_client(request: Request) -> PriceHistoryClient:
    """Retrieve the PriceHistoryClient created in the app lifespan."""
    client = getattr(request.app.state, "price_client", None)
    if not client:
        raise HTTPException(status_code=500, detail="price client not initialized")
    return client


@router.get(
    "/quote",
    response_model=QuoteResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
)
async def get_quote(
    request: Request,
    input_mint: str | None = Query(None, alias="inputMint"),
    output_mint: str | None = Query(None, alias="outputMint"),
    amount: str | None = Query(None),
    slippage_bps: str | None = Query(None, alias="slippageBps"),
):
    """
    Fetch quotes from every configured provider and return them ranked.

    Missing `inputMint`, `outputMint` or `amount` is rejected before any
    provider is called. `slippageBps` defaults to 50.
    """
    if not input_mint or not output_mint or not amount:
        return error_response(400, MISSING_PARAMS_MESSAGE)

    try:
        swap = SwapRequest(
            input_mint=input_mint,
            output_mint=output_mint,
            amount=amount,
            slippage_bps=slippage_bps or DEFAULT_SLIPPAGE_BPS,
        )
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(_query_name(loc) for loc in err["loc"])
        return error_response(400, f"Invalid {field}: {err['msg']}")

    quotes = await get_aggregator(request).get_quotes(swap)
    return QuoteResponse(quotes=quotes)


@router.get(
    "/price",
    response_model=PriceResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_price(request: Request, days: str | None = Query(None)):
    """
    Price history of the charted asset for the last `days` days (default 7).

    Upstream non-2xx answers map to 502, any other failure to 500.
    """
    try:
        window = float(days) if days else DEFAULT_DAYS
    except ValueError:
        return error_response(400, f"Invalid days: {days!r}")
    if not math.isfinite(window) or window <= 0:
        return error_response(400, f"Invalid days: {days!r}")

    client = get_price_client(request)
    try:
        history = await client.get_history(window)
    except PriceHistoryError as e:
        return error_response(502, str(e))
    except Exception as e:
        logger.error(f"Price history failed for days={days}: {e!r}")
        return error_response(500, str(e) or "Unknown error")

    return PriceResponse.model_validate(history.model_dump())
