from __future__ import annotations

from dataclasses import dataclass

from pumpboard.domain.entities.market_coin import MarketCoin


@dataclass(frozen=True)
class ListTopMarketInput:
    limit: int | None = None
    use_cache: bool = True


@dataclass(frozen=True)
class ListTopMarketOutput:
    source: str
    data: list[MarketCoin]
