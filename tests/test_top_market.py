from __future__ import annotations

import asyncio

from fastapi.testclient import TestClient
import httpx
import pytest

from pumpboard.api.deps import get_list_top_market_use_case
from pumpboard.application.dto.pump_pools import SOURCE_LIVE, SOURCE_STALE
from pumpboard.application.dto.top_market import ListTopMarketInput
from pumpboard.application.use_cases.list_top_market import ListTopMarketUseCase
from pumpboard.domain.exceptions import MarketDataUnavailableError
from pumpboard.infrastructure.cache.response_cache import ResponseCache
from pumpboard.infrastructure.clients.coingecko_client import CoingeckoMarketClient
from pumpboard.infrastructure.clients.http_fetcher import RetryingFetcher, RetryingFetcherSettings
from pumpboard.infrastructure.clients.market_data_provider import CoingeckoMarketDataAdapter
from pumpboard.main import app


MARKETS = [
    {
        "id": "dogecoin",
        "symbol": "doge",
        "name": "Dogecoin",
        "image": "https://img.test/doge.png",
        "current_price": 0.12,
        "market_cap": 17500000000,
        "price_change_percentage_24h": -2.5,
        "total_volume": 900000000,
    },
    {
        "id": "bonk",
        "symbol": "bonk",
        "name": "Bonk",
        "image": None,
        "current_price": 0.00002,
        "market_cap": 1400000000,
        "price_change_percentage_24h": None,
        "total_volume": 120000000,
    },
]


class FakeCoingecko:
    def __init__(self, *, status: int = 200):
        self.status = status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status != 200:
            return httpx.Response(self.status)
        return httpx.Response(200, json=MARKETS)


def _use_case(upstream: FakeCoingecko, cache: ResponseCache) -> ListTopMarketUseCase:
    async def no_sleep(_seconds: float) -> None:
        return None

    fetcher = RetryingFetcher(
        RetryingFetcherSettings(max_attempts=2, base_delay_seconds=0.1, timeout_seconds=5),
        transport=httpx.MockTransport(upstream),
        sleep=no_sleep,
    )
    client = CoingeckoMarketClient(api_base="https://cg.test/api/v3/", fetcher=fetcher)
    return ListTopMarketUseCase(
        market_data_port=CoingeckoMarketDataAdapter(client),
        cache_port=cache,
    )


def test_top_market_requests_meme_category_by_market_cap():
    upstream = FakeCoingecko()
    result = asyncio.run(
        _use_case(upstream, ResponseCache(ttl_seconds=2)).execute(
            ListTopMarketInput(limit=10, use_cache=False)
        )
    )

    assert result.source == SOURCE_LIVE
    assert [coin.id for coin in result.data] == ["dogecoin", "bonk"]
    assert result.data[1].image == ""
    assert result.data[1].price_change_percentage_24h == 0
    request = upstream.requests[0]
    assert request.url.path == "/api/v3/coins/markets"
    assert request.url.params["category"] == "meme-token"
    assert request.url.params["order"] == "market_cap_desc"
    assert request.url.params["per_page"] == "10"


def test_top_market_serves_stale_then_fails_without_cache():
    cache = ResponseCache(ttl_seconds=2)
    asyncio.run(_use_case(FakeCoingecko(), cache).execute(ListTopMarketInput(use_cache=False)))

    stale = asyncio.run(
        _use_case(FakeCoingecko(status=429), cache).execute(ListTopMarketInput(use_cache=False))
    )
    assert stale.source == SOURCE_STALE
    assert len(stale.data) == 2

    with pytest.raises(MarketDataUnavailableError):
        asyncio.run(
            _use_case(FakeCoingecko(status=500), ResponseCache(ttl_seconds=2)).execute(
                ListTopMarketInput(use_cache=False)
            )
        )


def test_top_market_router_returns_coins():
    use_case = _use_case(FakeCoingecko(), ResponseCache(ttl_seconds=2))
    app.dependency_overrides[get_list_top_market_use_case] = lambda: use_case
    client = TestClient(app)

    response = client.get("/v1/top-market", params={"limit": 2})

    assert response.status_code == 200
    assert [coin["symbol"] for coin in response.json()] == ["doge", "bonk"]

    app.dependency_overrides.clear()
