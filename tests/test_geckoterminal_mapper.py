from __future__ import annotations

import pytest

from pumpboard.domain.entities.pump_pool import PERIODS, PriceChanges
from pumpboard.infrastructure.clients.http_fetcher import UpstreamPayloadError
from pumpboard.infrastructure.mappers.geckoterminal_mapper import (
    map_pool_detail,
    map_pool_listing,
)
from tests.payloads import pool_detail_payload, pool_list_payload, pool_record, token_record


def test_pool_listing_decodes_pools_and_token_map():
    listing = map_pool_listing(pool_list_payload([pool_record(1)], [token_record(1)]))

    assert len(listing.pools) == 1
    pool = listing.pools[0]
    assert pool.id == "solana_pool1"
    assert pool.address == "Pool1Address"
    assert pool.base_token_id == "solana_token1"
    assert pool.price_usd == "0.00042"
    assert pool.reserve_usd == "9000"
    assert pool.swap_count_24h == 121
    assert pool.fdv_usd == 52000.5
    assert pool.market_cap_to_holders_ratio == 4.2
    assert pool.price_changes.for_period("1h") == "1.5"
    assert set(listing.tokens) == {"solana_token1"}
    assert listing.tokens["solana_token1"].symbol == "MEME1"


def test_pool_listing_defaults_missing_fields_once():
    record = {"id": "solana_bare", "attributes": {"address": "BareAddress"}}

    pool = map_pool_listing({"data": [record]}).pools[0]

    assert pool.base_token_id == ""
    assert pool.price_usd == "0"
    assert pool.volume_usd == "0"
    assert pool.created_at == ""
    assert pool.swap_count_24h == 0
    assert pool.fdv_usd == 0
    assert pool.price_changes == PriceChanges()
    assert all(pool.price_changes.for_period(period) == "0" for period in PERIODS)


def test_pool_listing_skips_records_without_address():
    listing = map_pool_listing({"data": [{"id": "x", "attributes": {}}, pool_record(2)]})

    assert [pool.id for pool in listing.pools] == ["solana_pool2"]


@pytest.mark.parametrize("payload", [None, [], {"included": []}, {"data": {"id": "x"}}])
def test_pool_listing_rejects_payload_without_data_array(payload):
    with pytest.raises(UpstreamPayloadError):
        map_pool_listing(payload)


def test_pool_detail_keeps_only_security_services():
    detail = map_pool_detail(pool_detail_payload(1))

    assert detail.gt_score == 72.5
    assert detail.score_details.creation == 90
    assert detail.locked_liquidity is not None
    assert detail.locked_liquidity.locked_percent == 100
    assert detail.locked_liquidity.next_unlock_timestamp is None
    assert detail.sentiment_votes.up_percentage == 70
    assert [link.name for link in detail.security_links] == ["RugCheck"]
    assert len(detail.token_profiles) == 1
    social = detail.token_profiles[0].social_links
    assert social.websites == ["https://meme.test"]
    assert social.twitter_handle == "memecoin"
    assert social.telegram_handle is None
    assert social.description == "A very serious token."


def test_pool_detail_with_empty_payload_is_all_defaults():
    detail = map_pool_detail({})

    assert detail.gt_score == 0
    assert detail.score_details.info == 0
    assert detail.locked_liquidity is None
    assert detail.sentiment_votes.total == 0
    assert detail.security_links == []
    assert detail.token_profiles == []
