from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from pumpboard.api.deps import get_list_top_market_use_case
from pumpboard.api.routers.pump_pools import error_response
from pumpboard.api.schemas.pump_pools import ErrorResponse
from pumpboard.api.schemas.top_market import MarketCoinResponse
from pumpboard.application.dto.top_market import ListTopMarketInput
from pumpboard.application.use_cases.list_top_market import ListTopMarketUseCase
from pumpboard.domain.exceptions import MarketDataUnavailableError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/v1/top-market",
    response_model=list[MarketCoinResponse],
    responses={500: {"model": ErrorResponse}},
)
async def list_top_market(
    limit: int | None = Query(default=None, ge=1, le=250),
    use_case: ListTopMarketUseCase = Depends(get_list_top_market_use_case),
):
    try:
        result = await use_case.execute(ListTopMarketInput(limit=limit))
    except MarketDataUnavailableError as exc:
        logger.error("top_market_router: unavailable limit=%s error=%s", limit, exc)
        return error_response(500, "Internal Server Error", str(exc))

    return [
        MarketCoinResponse(
            id=coin.id,
            name=coin.name,
            symbol=coin.symbol,
            image=coin.image,
            current_price=coin.current_price,
            market_cap=coin.market_cap,
            price_change_percentage_24h=coin.price_change_percentage_24h,
            total_volume=coin.total_volume,
        )
        for coin in result.data
    ]
