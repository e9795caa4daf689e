from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pumpboard.domain.entities.market_coin import MarketCoin
from pumpboard.infrastructure.clients.http_fetcher import UpstreamPayloadError


def _float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def map_market_coin(row: Mapping[str, Any]) -> MarketCoin:
    return MarketCoin(
        id=str(row.get("id") or ""),
        name=str(row.get("name") or ""),
        symbol=str(row.get("symbol") or ""),
        image=str(row.get("image") or ""),
        current_price=_float(row.get("current_price")),
        market_cap=_float(row.get("market_cap")),
        price_change_percentage_24h=_float(row.get("price_change_percentage_24h")),
        total_volume=_float(row.get("total_volume")),
    )


def map_market_coins(payload: Any) -> list[MarketCoin]:
    if not isinstance(payload, list):
        raise UpstreamPayloadError("Markets payload is not an array.")
    return [map_market_coin(row) for row in payload if isinstance(row, Mapping) and row.get("id")]
