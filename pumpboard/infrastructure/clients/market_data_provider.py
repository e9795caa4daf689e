from __future__ import annotations

from pumpboard.application.ports.market_data_port import MarketDataPort
from pumpboard.domain.entities.market_coin import MarketCoin
from pumpboard.domain.exceptions import UpstreamUnavailableError
from pumpboard.infrastructure.clients.coingecko_client import CoingeckoMarketClient
from pumpboard.infrastructure.clients.http_fetcher import UpstreamError


class CoingeckoMarketDataAdapter(MarketDataPort):
    def __init__(self, client: CoingeckoMarketClient):
        self._client = client

    async def list_meme_coins(self, *, limit: int) -> list[MarketCoin]:
        try:
            return await self._client.fetch_meme_coins(limit=limit)
        except UpstreamError as exc:
            raise UpstreamUnavailableError(str(exc)) from exc
