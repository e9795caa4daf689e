from __future__ import annotations

from decimal import Decimal
import logging

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from pumpboard.api.deps import get_list_pump_pools_use_case
from pumpboard.api.schemas.pump_pools import (
    ErrorResponse,
    LockedLiquidityResponse,
    PumpPoolResponse,
    ScoreDetailsResponse,
    SecurityLinkResponse,
    SecurityResponse,
    SentimentVotesResponse,
    SocialLinksResponse,
)
from pumpboard.application.dto.pump_pools import (
    SOURCE_CACHE,
    SOURCE_STALE,
    ListPumpPoolsInput,
)
from pumpboard.application.use_cases.list_pump_pools import ListPumpPoolsUseCase
from pumpboard.domain.entities.pool_filters import PoolFilters, RangeFilter
from pumpboard.domain.entities.pump_pool import PoolView
from pumpboard.domain.exceptions import PumpPoolsInputError, PumpPoolsUnavailableError

router = APIRouter()
logger = logging.getLogger(__name__)

CACHE_HEADER = "X-Cache"
_CACHE_HEADER_VALUES = {SOURCE_CACHE: "HIT", SOURCE_STALE: "STALE"}


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


def to_pump_pool_response(view: PoolView) -> PumpPoolResponse:
    security = view.security
    locked = security.locked_liquidity
    social = view.social_links
    return PumpPoolResponse(
        id=view.id,
        base_token_id=view.base_token_id,
        name=view.name,
        symbol=view.symbol,
        image_url=view.image_url,
        pump_address=view.pump_address,
        pool_address=view.pool_address,
        price=view.price,
        age=view.age,
        volume=view.volume,
        liquidity=view.liquidity,
        market_cap_to_holder=view.market_cap_to_holder,
        fdv=view.fdv,
        changes=view.changes.as_dict(),
        social_links=SocialLinksResponse(
            websites=list(social.websites),
            discord_url=social.discord_url,
            twitter_handle=social.twitter_handle,
            telegram_handle=social.telegram_handle,
            medium_handle=social.medium_handle,
            github_repo_name=social.github_repo_name,
            subreddit_handle=social.subreddit_handle,
            tiktok_handle=social.tiktok_handle,
            youtube_handle=social.youtube_handle,
            facebook_handle=social.facebook_handle,
            instagram_handle=social.instagram_handle,
            description=social.description,
        ),
        security=SecurityResponse(
            gt_score=security.gt_score,
            gt_score_details=ScoreDetailsResponse(
                info=security.score_details.info,
                pool=security.score_details.pool,
                transactions=security.score_details.transactions,
                holders=security.score_details.holders,
                creation=security.score_details.creation,
            ),
            locked_liquidity=(
                LockedLiquidityResponse(
                    locked_percent=locked.locked_percent,
                    next_unlock_timestamp=locked.next_unlock_timestamp,
                    final_unlock_timestamp=locked.final_unlock_timestamp,
                    source=locked.source,
                    url=locked.url,
                )
                if locked is not None
                else None
            ),
            sentiment_votes=SentimentVotesResponse(
                total=security.sentiment_votes.total,
                up_percentage=security.sentiment_votes.up_percentage,
                down_percentage=security.sentiment_votes.down_percentage,
            ),
            security_links=[
                SecurityLinkResponse(
                    name=link.name,
                    category=link.category,
                    url=link.url,
                    image_url=link.image_url,
                )
                for link in security.security_links
            ],
        ),
        swap_count_24h=view.swap_count_24h,
    )


@router.get(
    "/pools",
    response_model=list[PumpPoolResponse],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@router.get(
    "/api/pump-fun-combined",
    response_model=list[PumpPoolResponse],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def list_pump_pools(
    response: Response,
    period: str = "24h",
    cache: bool = False,
    liquidity_gte: Decimal | None = Query(default=None, alias="liquidity[gte]"),
    liquidity_lte: Decimal | None = Query(default=None, alias="liquidity[lte]"),
    fdv_gte: Decimal | None = Query(default=None, alias="fdv_in_usd[gte]"),
    fdv_lte: Decimal | None = Query(default=None, alias="fdv_in_usd[lte]"),
    volume_gte: Decimal | None = Query(default=None, alias="volume_24h[gte]"),
    volume_lte: Decimal | None = Query(default=None, alias="volume_24h[lte]"),
    txn_gte: Decimal | None = Query(default=None, alias="tx_count_24h[gte]"),
    txn_lte: Decimal | None = Query(default=None, alias="tx_count_24h[lte]"),
    buys_gte: Decimal | None = Query(default=None, alias="buys_24h[gte]"),
    buys_lte: Decimal | None = Query(default=None, alias="buys_24h[lte]"),
    sells_gte: Decimal | None = Query(default=None, alias="sells_24h[gte]"),
    sells_lte: Decimal | None = Query(default=None, alias="sells_24h[lte]"),
    use_case: ListPumpPoolsUseCase = Depends(get_list_pump_pools_use_case),
):
    if any(value is not None for value in (buys_gte, buys_lte, sells_gte, sells_lte)):
        return error_response(
            400,
            "Bad Request",
            "buys_24h and sells_24h filters are not supported.",
        )

    try:
        result = await use_case.execute(
            ListPumpPoolsInput(
                period=period,
                use_cache=cache,
                filters=PoolFilters(
                    liquidity=RangeFilter(gte=liquidity_gte, lte=liquidity_lte),
                    fdv=RangeFilter(gte=fdv_gte, lte=fdv_lte),
                    volume=RangeFilter(gte=volume_gte, lte=volume_lte),
                    txn=RangeFilter(gte=txn_gte, lte=txn_lte),
                ),
            )
        )
    except PumpPoolsInputError as exc:
        return error_response(400, "Bad Request", str(exc))
    except PumpPoolsUnavailableError as exc:
        logger.error("pump_pools_router: unavailable period=%s error=%s", period, exc)
        return error_response(500, "Internal Server Error", str(exc))
    except Exception as exc:  # noqa: BLE001
        logger.exception("pump_pools_router: unexpected_error period=%s", period)
        return error_response(500, "Internal Server Error", str(exc) or "Unknown error occurred")

    response.headers[CACHE_HEADER] = _CACHE_HEADER_VALUES.get(result.source, "MISS")
    return [to_pump_pool_response(view) for view in result.data]
