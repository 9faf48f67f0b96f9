"""
Unit tests for core data models.
"""

import pytest
from pydantic import ValidationError

from zoff.core.models import MINTS, Platform, PriceHistory, Quote, SwapRequest


def test_failed_quote_is_zeroed():
    q = Quote.failed(Platform.JUPITER, "1000", "HTTP 500: boom")
    assert q.output_amount == "0"
    assert q.price_impact_pct == "0"
    assert q.route == ""
    assert q.input_amount == "1000"
    assert not q.ok


def test_failed_quote_without_message_gets_generic_error():
    q = Quote.failed(Platform.RAYDIUM, "1000", "")
    assert q.error == "Unknown error"


def test_error_quote_with_amounts_is_rejected():
    with pytest.raises(ValidationError, match="zeroed"):
        Quote(platform=Platform.DFLOW, input_amount="1", output_amount="5", error="x")


def test_quote_rejects_non_integer_amounts():
    with pytest.raises(ValidationError):
        Quote(platform=Platform.TITAN, input_amount="1", output_amount="1.5")


def test_quote_serializes_camel_case_and_drops_missing_error():
    q = Quote(
        platform=Platform.JUPITER,
        input_amount="1000000000",
        output_amount="912345678",
        price_impact_pct="0.01",
        route="Orca",
    )
    data = q.model_dump(by_alias=True, exclude_none=True, mode="json")
    assert data == {
        "platform": "jupiter",
        "inputAmount": "1000000000",
        "outputAmount": "912345678",
        "priceImpactPct": "0.01",
        "route": "Orca",
    }


def test_output_value_keeps_full_precision():
    q = Quote(platform=Platform.JUPITER, input_amount="1", output_amount="123456789012345678901234567890")
    assert q.output_value == 123456789012345678901234567890


def test_swap_request_query_and_default_slippage():
    req = SwapRequest(input_mint=MINTS["SOL"], output_mint=MINTS["JitoSOL"], amount="1000000000")
    assert req.to_query() == {
        "inputMint": MINTS["SOL"],
        "outputMint": MINTS["JitoSOL"],
        "amount": "1000000000",
        "slippageBps": "50",
    }


def test_swap_request_reversed():
    req = SwapRequest(input_mint="A", output_mint="B", amount="10", slippage_bps=100)
    rev = req.reversed()
    assert (rev.input_mint, rev.output_mint, rev.amount, rev.slippage_bps) == ("B", "A", "10", 100)


@pytest.mark.parametrize("amount", ["0", "-5", "1.5", "abc", ""])
def test_swap_request_rejects_bad_amounts(amount):
    with pytest.raises(ValidationError):
        SwapRequest(input_mint="A", output_mint="B", amount=amount)


def test_swap_request_rejects_out_of_range_slippage():
    with pytest.raises(ValidationError):
        SwapRequest(input_mint="A", output_mint="B", amount="1", slippage_bps=10_001)


def test_price_history_change_percent():
    history = PriceHistory.from_market_chart([[0, 100.0], [1000, 110.0]])
    assert [(p.time, p.value) for p in history.prices] == [(0, 100.0), (1, 110.0)]
    assert history.current_price == pytest.approx(110.0)
    assert history.change_percent == pytest.approx(10.0)


def test_price_history_empty_series():
    history = PriceHistory.from_market_chart([])
    assert history.prices == []
    assert history.current_price == 0
    assert history.change_percent == 0


def test_price_history_non_positive_first_price():
    history = PriceHistory.from_market_chart([[0, 0.0], [1000, 5.0]])
    assert history.current_price == pytest.approx(5.0)
    assert history.change_percent == 0


def test_price_history_truncates_milliseconds():
    history = PriceHistory.from_market_chart([[1_700_000_000_999, 1.0]])
    assert history.prices[0].time == 1_700_000_000
