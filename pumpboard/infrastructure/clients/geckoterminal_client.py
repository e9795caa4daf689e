from __future__ import annotations

from dataclasses import dataclass
import logging

from pumpboard.domain.entities.pump_pool import PoolDetail, PoolListing
from pumpboard.infrastructure.clients.http_fetcher import RetryingFetcher
from pumpboard.infrastructure.mappers.geckoterminal_mapper import map_pool_detail, map_pool_listing


logger = logging.getLogger(__name__)


POOL_LIST_INCLUDES = "dex.network,tokens"
POOL_DETAIL_INCLUDES = ",".join(
    (
        "dex",
        "dex.network.explorers",
        "dex_link_services",
        "network_link_services",
        "pairs",
        "token_link_services",
        "tokens.token_security_metric",
        "tokens.tags",
        "pool_locked_liquidities",
    )
)


@dataclass(frozen=True)
class GeckoTerminalClientSettings:
    api_base: str
    network: str
    tag: str


class GeckoTerminalClient:
    def __init__(self, settings: GeckoTerminalClientSettings, fetcher: RetryingFetcher):
        self._settings = settings
        self._fetcher = fetcher

    def pool_list_url(self) -> str:
        return f"{self._settings.api_base.rstrip('/')}/tags/{self._settings.tag}/pools"

    def pool_detail_url(self, pool_address: str) -> str:
        return f"{self._settings.api_base.rstrip('/')}/{self._settings.network}/pools/{pool_address}"

    async def fetch_pool_listing(self, *, period: str) -> PoolListing:
        payload = await self._fetcher.fetch_json(
            self.pool_list_url(),
            params={"include": POOL_LIST_INCLUDES, "sort": f"-{period}_trend_score"},
        )
        listing = map_pool_listing(payload)
        logger.info(
            "geckoterminal_client: fetched_pool_listing period=%s pools=%s tokens=%s",
            period,
            len(listing.pools),
            len(listing.tokens),
        )
        return listing

    async def fetch_pool_detail(self, *, pool_address: str) -> PoolDetail:
        payload = await self._fetcher.fetch_json(
            self.pool_detail_url(pool_address),
            params={"include": POOL_DETAIL_INCLUDES, "base_token": "0"},
        )
        return map_pool_detail(payload)
