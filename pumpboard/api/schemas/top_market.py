from __future__ import annotations

from pydantic import BaseModel


class MarketCoinResponse(BaseModel):
    id: str
    name: str
    symbol: str
    image: str
    current_price: float
    market_cap: float
    price_change_percentage_24h: float
    total_volume: float
