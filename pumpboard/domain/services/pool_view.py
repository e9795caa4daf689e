from __future__ import annotations

from decimal import Decimal, InvalidOperation

from pumpboard.domain.entities.pool_filters import PoolFilters
from pumpboard.domain.entities.pump_pool import (
    PoolDetail,
    PoolSecurity,
    PoolSummary,
    PoolView,
    SocialLinks,
    TokenMeta,
)


_UNSORTABLE = Decimal("-Infinity")


def parse_decimal(value: str | float | int | None) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not parsed.is_finite():
        return None
    return parsed


def _social_links_for(detail: PoolDetail, token_address: str) -> SocialLinks:
    if not token_address:
        return SocialLinks()
    for profile in detail.token_profiles:
        if profile.address == token_address:
            return profile.social_links
    return SocialLinks()


def merge_pool_view(
    pool: PoolSummary,
    token: TokenMeta | None,
    detail: PoolDetail | None,
) -> PoolView:
    """Join a listed pool, its base token and its detail payload into one view record.

    Never raises: a missing token yields empty strings, a missing detail yields a zeroed
    security block and empty social links.
    """
    detail = detail or PoolDetail()
    token_address = token.address if token else ""

    return PoolView(
        id=pool.id,
        base_token_id=pool.base_token_id,
        name=token.name if token else "",
        symbol=token.symbol if token else "",
        image_url=token.image_url if token else "",
        pump_address=token_address,
        pool_address=pool.address,
        price=pool.price_usd,
        age=pool.created_at,
        volume=pool.volume_usd,
        liquidity=pool.reserve_usd,
        market_cap_to_holder=pool.market_cap_to_holders_ratio,
        fdv=pool.fdv_usd,
        changes=pool.price_changes,
        social_links=_social_links_for(detail, token_address),
        security=PoolSecurity(
            gt_score=detail.gt_score,
            score_details=detail.score_details,
            locked_liquidity=detail.locked_liquidity,
            sentiment_votes=detail.sentiment_votes,
            security_links=list(detail.security_links),
        ),
        swap_count_24h=pool.swap_count_24h,
    )


def sort_by_change(views: list[PoolView], period: str) -> list[PoolView]:
    def change_value(view: PoolView) -> Decimal:
        parsed = parse_decimal(view.changes.for_period(period))
        return parsed if parsed is not None else _UNSORTABLE

    return sorted(views, key=change_value, reverse=True)


def unique_by_id(views: list[PoolView]) -> list[PoolView]:
    seen: set[str] = set()
    unique: list[PoolView] = []
    for view in views:
        if view.id in seen:
            continue
        seen.add(view.id)
        unique.append(view)
    return unique


def apply_filters(views: list[PoolView], filters: PoolFilters) -> list[PoolView]:
    if filters.is_empty:
        return list(views)

    checks = (
        (filters.liquidity, lambda view: view.liquidity),
        (filters.fdv, lambda view: view.fdv),
        (filters.volume, lambda view: view.volume),
        (filters.txn, lambda view: view.swap_count_24h),
    )

    def keep(view: PoolView) -> bool:
        for range_filter, getter in checks:
            if range_filter.is_empty:
                continue
            value = parse_decimal(getter(view))
            if value is None or not range_filter.accepts(value):
                return False
        return True

    return [view for view in views if keep(view)]
