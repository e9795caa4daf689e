from __future__ import annotations

import logging

from pumpboard.application.dto.pump_pools import SOURCE_CACHE, SOURCE_LIVE, SOURCE_STALE
from pumpboard.application.dto.top_market import ListTopMarketInput, ListTopMarketOutput
from pumpboard.application.ports.market_data_port import MarketDataPort
from pumpboard.application.ports.response_cache_port import ResponseCachePort
from pumpboard.domain.exceptions import MarketDataUnavailableError, UpstreamUnavailableError


logger = logging.getLogger(__name__)

MAX_LIMIT = 250


class ListTopMarketUseCase:
    def __init__(
        self,
        *,
        market_data_port: MarketDataPort,
        cache_port: ResponseCachePort,
        default_limit: int = 10,
    ):
        self._market_data_port = market_data_port
        self._cache_port = cache_port
        self._default_limit = default_limit

    async def execute(self, command: ListTopMarketInput) -> ListTopMarketOutput:
        requested = command.limit if command.limit is not None else self._default_limit
        limit = max(1, min(requested, MAX_LIMIT))
        cache_key = f"top-market-{limit}"

        if command.use_cache:
            cached = self._cache_port.get(cache_key)
            if cached is not None and cached.is_fresh:
                return ListTopMarketOutput(source=SOURCE_CACHE, data=cached.payload)

        try:
            coins = await self._market_data_port.list_meme_coins(limit=limit)
        except UpstreamUnavailableError as exc:
            stale = self._cache_port.get(cache_key)
            if stale is None:
                raise MarketDataUnavailableError(str(exc)) from exc
            logger.warning("list_top_market: serving_stale_cache limit=%s error=%s", limit, exc)
            return ListTopMarketOutput(source=SOURCE_STALE, data=stale.payload)

        self._cache_port.put(cache_key, coins)
        return ListTopMarketOutput(source=SOURCE_LIVE, data=coins)
