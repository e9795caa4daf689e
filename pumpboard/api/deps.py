from __future__ import annotations

from functools import lru_cache

from pumpboard.application.use_cases.list_pump_pools import ListPumpPoolsUseCase
from pumpboard.application.use_cases.list_top_market import ListTopMarketUseCase
from pumpboard.infrastructure.cache.response_cache import ResponseCache
from pumpboard.infrastructure.clients.coingecko_client import CoingeckoMarketClient
from pumpboard.infrastructure.clients.geckoterminal_client import (
    GeckoTerminalClient,
    GeckoTerminalClientSettings,
)
from pumpboard.infrastructure.clients.http_fetcher import RetryingFetcher, RetryingFetcherSettings
from pumpboard.infrastructure.clients.market_data_provider import CoingeckoMarketDataAdapter
from pumpboard.infrastructure.clients.pump_pool_provider import GeckoTerminalPumpPoolAdapter
from pumpboard.shared.config import get_settings


@lru_cache(maxsize=1)
def get_response_cache() -> ResponseCache:
    settings = get_settings()
    return ResponseCache(
        ttl_seconds=settings.cache_ttl_seconds,
        max_entries=settings.cache_max_entries,
    )


@lru_cache(maxsize=1)
def _get_retrying_fetcher() -> RetryingFetcher:
    settings = get_settings()
    return RetryingFetcher(
        RetryingFetcherSettings(
            max_attempts=settings.fetch_max_attempts,
            base_delay_seconds=settings.fetch_base_delay_seconds,
            timeout_seconds=settings.http_timeout_seconds,
        )
    )


@lru_cache(maxsize=1)
def _get_geckoterminal_client() -> GeckoTerminalClient:
    settings = get_settings()
    return GeckoTerminalClient(
        GeckoTerminalClientSettings(
            api_base=settings.geckoterminal_api_base,
            network=settings.geckoterminal_network,
            tag=settings.pump_tag,
        ),
        fetcher=_get_retrying_fetcher(),
    )


@lru_cache(maxsize=1)
def _get_coingecko_client() -> CoingeckoMarketClient:
    settings = get_settings()
    return CoingeckoMarketClient(
        api_base=settings.coingecko_api_base,
        fetcher=_get_retrying_fetcher(),
    )


def get_list_pump_pools_use_case() -> ListPumpPoolsUseCase:
    settings = get_settings()
    return ListPumpPoolsUseCase(
        pump_pool_port=GeckoTerminalPumpPoolAdapter(_get_geckoterminal_client()),
        cache_port=get_response_cache(),
        batch_size=settings.batch_size,
        batch_delay_seconds=settings.batch_delay_seconds,
    )


def get_list_top_market_use_case() -> ListTopMarketUseCase:
    settings = get_settings()
    return ListTopMarketUseCase(
        market_data_port=CoingeckoMarketDataAdapter(_get_coingecko_client()),
        cache_port=get_response_cache(),
        default_limit=settings.top_market_limit,
    )
