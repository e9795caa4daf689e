from __future__ import annotations

from pumpboard.domain.entities.market_coin import MarketCoin
from pumpboard.infrastructure.clients.http_fetcher import RetryingFetcher
from pumpboard.infrastructure.mappers.coingecko_mapper import map_market_coins


MEME_CATEGORY = "meme-token"


class CoingeckoMarketClient:
    def __init__(self, api_base: str, fetcher: RetryingFetcher):
        self.api_base = api_base.rstrip("/")
        self._fetcher = fetcher

    async def fetch_meme_coins(self, *, limit: int) -> list[MarketCoin]:
        url = f"{self.api_base}/coins/markets"
        params = {
            "vs_currency": "usd",
            "category": MEME_CATEGORY,
            "order": "market_cap_desc",
            "per_page": str(limit),
            "page": "1",
            "sparkline": "false",
        }
        payload = await self._fetcher.fetch_json(url, params=params)
        return map_market_coins(payload)
