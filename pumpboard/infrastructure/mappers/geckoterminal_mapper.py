from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pumpboard.domain.entities.pump_pool import (
    LockedLiquidity,
    PoolDetail,
    PoolListing,
    PoolSummary,
    PriceChanges,
    ScoreDetails,
    SecurityLink,
    SentimentVotes,
    SocialLinks,
    TokenMeta,
    TokenProfile,
)
from pumpboard.infrastructure.clients.http_fetcher import UpstreamPayloadError


SECURITY_LINK_SERVICES = frozenset({"RugCheck", "SolSniffer", "QuillCheck", "GateKept"})

_SOCIAL_HANDLE_FIELDS = (
    "discord_url",
    "twitter_handle",
    "telegram_handle",
    "medium_handle",
    "github_repo_name",
    "subreddit_handle",
    "tiktok_handle",
    "youtube_handle",
    "facebook_handle",
    "instagram_handle",
)


def _obj(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value)


def _str_or_none(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _num_str(value: Any) -> str:
    return _str(value, "0") or "0"


def _float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _included(payload: Mapping[str, Any], record_type: str) -> list[Mapping[str, Any]]:
    return [
        item
        for item in _list(payload.get("included"))
        if isinstance(item, Mapping) and item.get("type") == record_type
    ]


def map_price_changes(raw: Any) -> PriceChanges:
    changes = _obj(raw)
    return PriceChanges(
        m5=_num_str(changes.get("last_5m")),
        m15=_num_str(changes.get("last_15m")),
        m30=_num_str(changes.get("last_30m")),
        h1=_num_str(changes.get("last_1h")),
        h6=_num_str(changes.get("last_6h")),
        h24=_num_str(changes.get("last_24h")),
    )


def map_token_meta(record: Mapping[str, Any]) -> TokenMeta:
    attributes = _obj(record.get("attributes"))
    return TokenMeta(
        id=_str(record.get("id")),
        name=_str(attributes.get("name")),
        symbol=_str(attributes.get("symbol")),
        image_url=_str(attributes.get("image_url")),
        address=_str(attributes.get("address")),
    )


def map_pool_summary(record: Mapping[str, Any]) -> PoolSummary | None:
    attributes = _obj(record.get("attributes"))
    pool_id = _str(record.get("id"))
    address = _str(attributes.get("address"))
    if not pool_id or not address:
        return None

    base_token_id = _str(attributes.get("base_token_id"))
    token_values = _obj(_obj(attributes.get("token_value_data")).get(base_token_id))

    return PoolSummary(
        id=pool_id,
        address=address,
        base_token_id=base_token_id,
        price_usd=_num_str(attributes.get("price_in_usd")),
        created_at=_str(attributes.get("pool_created_at")),
        volume_usd=_num_str(attributes.get("to_volume_in_usd")),
        reserve_usd=_num_str(attributes.get("reserve_in_usd")),
        price_changes=map_price_changes(attributes.get("price_percent_changes")),
        swap_count_24h=_int(attributes.get("swap_count_24h")),
        fdv_usd=_float(token_values.get("fdv_in_usd")),
        market_cap_to_holders_ratio=_float(token_values.get("market_cap_to_holders_ratio")),
    )


def map_pool_listing(payload: Any) -> PoolListing:
    if not isinstance(payload, Mapping) or not isinstance(payload.get("data"), list):
        raise UpstreamPayloadError("Pool list payload has no data array.")

    tokens: dict[str, TokenMeta] = {}
    for record in _included(payload, "token"):
        token = map_token_meta(record)
        if token.id:
            tokens[token.id] = token

    pools = [
        pool
        for pool in (map_pool_summary(_obj(record)) for record in payload["data"])
        if pool is not None
    ]
    return PoolListing(pools=pools, tokens=tokens)


def map_locked_liquidity(raw: Any) -> LockedLiquidity | None:
    if not isinstance(raw, Mapping):
        return None
    return LockedLiquidity(
        locked_percent=_float(raw.get("locked_percent")),
        next_unlock_timestamp=_str_or_none(raw.get("next_unlock_timestamp")),
        final_unlock_timestamp=_str_or_none(raw.get("final_unlock_timestamp")),
        source=_str(raw.get("source")),
        url=_str(raw.get("url")),
    )


def map_social_links(attributes: Mapping[str, Any]) -> SocialLinks:
    links = _obj(attributes.get("links"))
    handles = {name: _str_or_none(links.get(name)) for name in _SOCIAL_HANDLE_FIELDS}
    return SocialLinks(
        websites=[_str(site) for site in _list(links.get("websites")) if site],
        description=_str(_obj(attributes.get("description")).get("en")),
        **handles,
    )


def map_pool_detail(payload: Any) -> PoolDetail:
    if not isinstance(payload, Mapping):
        raise UpstreamPayloadError("Pool detail payload is not an object.")

    attributes = _obj(_obj(payload.get("data")).get("attributes"))
    score = _obj(attributes.get("gt_score_details"))
    votes = _obj(attributes.get("sentiment_votes"))

    security_links = []
    for service in _included(payload, "network_link_service"):
        service_attributes = _obj(service.get("attributes"))
        name = _str(service_attributes.get("name"))
        if name not in SECURITY_LINK_SERVICES:
            continue
        security_links.append(
            SecurityLink(
                name=name,
                category=_str(service_attributes.get("category")),
                url=_str(service_attributes.get("url")),
                image_url=_str(service_attributes.get("image_url")),
            )
        )

    token_profiles = []
    for token in _included(payload, "token"):
        token_attributes = _obj(token.get("attributes"))
        address = _str(token_attributes.get("address"))
        if not address:
            continue
        token_profiles.append(
            TokenProfile(address=address, social_links=map_social_links(token_attributes))
        )

    return PoolDetail(
        gt_score=_float(attributes.get("gt_score")),
        score_details=ScoreDetails(
            info=_float(score.get("info")),
            pool=_float(score.get("pool")),
            transactions=_float(score.get("transactions")),
            holders=_float(score.get("holders")),
            creation=_float(score.get("creation")),
        ),
        locked_liquidity=map_locked_liquidity(attributes.get("locked_liquidity")),
        sentiment_votes=SentimentVotes(
            total=_float(votes.get("total")),
            up_percentage=_float(votes.get("up_percentage")),
            down_percentage=_float(votes.get("down_percentage")),
        ),
        security_links=security_links,
        token_profiles=token_profiles,
    )
