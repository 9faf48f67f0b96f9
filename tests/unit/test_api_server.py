import httpx
import pytest
from fastapi.testclient import TestClient

from zoff.api.server import create_app
from zoff.core.config import Settings
from zoff.core.models import MINTS

QUOTE_PARAMS = {
    "inputMint": MINTS["SOL"],
    "outputMint": MINTS["JitoSOL"],
    "amount": "1000000000",
    "slippageBps": "50",
}


class Upstreams:
    """Fake Jupiter, Raydium and CoinGecko; records every outbound request."""

    def __init__(self):
        self.requests = []
        self.jupiter_status = 200
        self.coingecko = lambda request: httpx.Response(
            200, json={"prices": [[0, 100.0], [1000, 110.0]]}
        )

    def __call__(self, request):
        self.requests.append(request)
        host = request.url.host
        if host == "api.jup.ag":
            if self.jupiter_status != 200:
                return httpx.Response(self.jupiter_status, text="jupiter down")
            return httpx.Response(200, json={
                "inAmount": "1000000000",
                "outAmount": "912345678",
                "priceImpactPct": "0.0001",
                "routePlan": [{"swapInfo": {"label": "Orca"}}, {"swapInfo": {"label": "Whirlpool"}}],
            })
        if host == "transaction-v1.raydium.io":
            return httpx.Response(200, json={
                "success": True,
                "data": {"inputAmount": "1000000000", "outputAmount": "912000000", "routePlan": []},
            })
        if host == "api.coingecko.com":
            return self.coingecko(request)
        return httpx.Response(404, text="unknown host")


@pytest.fixture
def upstreams():
    return Upstreams()


@pytest.fixture
def client(upstreams):
    app = create_app(Settings(), transport=httpx.MockTransport(upstreams))
    with TestClient(app) as c:
        yield c


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_quote_ranked(client):
    response = client.get("/api/quote", params=QUOTE_PARAMS)
    assert response.status_code == 200
    quotes = response.json()["quotes"]
    assert [q["platform"] for q in quotes] == ["jupiter", "raydium"]
    assert quotes[0] == {
        "platform": "jupiter",
        "inputAmount": "1000000000",
        "outputAmount": "912345678",
        "priceImpactPct": "0.0001",
        "route": "Orca → Whirlpool",
    }
    assert quotes[1]["route"] == "direct"


def test_quote_failed_provider_listed_last(client, upstreams):
    upstreams.jupiter_status = 500
    quotes = client.get("/api/quote", params=QUOTE_PARAMS).json()["quotes"]
    assert [q["platform"] for q in quotes] == ["raydium", "jupiter"]
    assert quotes[1]["error"] == "HTTP 500: jupiter down"
    assert quotes[1]["outputAmount"] == "0"
    assert "error" not in quotes[0]


@pytest.mark.parametrize("missing", ["inputMint", "outputMint", "amount"])
def test_quote_missing_param_rejected_without_outbound_calls(client, upstreams, missing):
    params = {k: v for k, v in QUOTE_PARAMS.items() if k != missing}
    response = client.get("/api/quote", params=params)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required params: inputMint, outputMint, amount"}
    assert upstreams.requests == []


def test_quote_default_slippage(client, upstreams):
    params = {k: v for k, v in QUOTE_PARAMS.items() if k != "slippageBps"}
    assert client.get("/api/quote", params=params).status_code == 200
    assert all(r.url.params["slippageBps"] == "50" for r in upstreams.requests)


@pytest.mark.parametrize("field,value", [("amount", "1.5"), ("amount", "0"), ("slippageBps", "lots")])
def test_quote_invalid_param_rejected(client, upstreams, field, value):
    response = client.get("/api/quote", params=dict(QUOTE_PARAMS, **{field: value}))
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid")
    assert upstreams.requests == []


def test_price_history(client, upstreams):
    response = client.get("/api/price", params={"days": "1"})
    assert response.status_code == 200
    assert response.json() == {
        "prices": [{"time": 0, "value": 100.0}, {"time": 1, "value": 110.0}],
        "currentPrice": 110.0,
        "changePercent": pytest.approx(10.0),
    }
    assert upstreams.requests[0].url.params["days"] == "1"


def test_price_default_window(client, upstreams):
    assert client.get("/api/price").status_code == 200
    assert upstreams.requests[0].url.params["days"] == "7"


def test_price_upstream_error_is_502(client, upstreams):
    upstreams.coingecko = lambda request: httpx.Response(429, text="slow down")
    response = client.get("/api/price", params={"days": "7"})
    assert response.status_code == 502
    assert response.json() == {"error": "CoinGecko error: 429 slow down"}


def test_price_transport_failure_is_500(client, upstreams):
    def fail(request):
        raise httpx.ConnectError("network down", request=request)

    upstreams.coingecko = fail
    response = client.get("/api/price", params={"days": "7"})
    assert response.status_code == 500
    assert response.json() == {"error": "network down"}


@pytest.mark.parametrize("days", ["abc", "0", "-1", "nan"])
def test_price_invalid_days(client, upstreams, days):
    response = client.get("/api/price", params={"days": days})
    assert response.status_code == 400
    assert upstreams.requests == []


def test_invalid_param_named_as_sent(client, upstreams):
    response = client.get("/api/quote", params=dict(QUOTE_PARAMS, slippageBps="20000"))
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid slippageBps:")
    assert upstreams.requests == []
