from __future__ import annotations

from typing import Protocol

from pumpboard.domain.entities.market_coin import MarketCoin


class MarketDataPort(Protocol):
    async def list_meme_coins(self, *, limit: int) -> list[MarketCoin]:
        ...
