from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


# Upstream throttling defaults. The aggregator starts answering 429 when a single
# client exceeds roughly 30 requests per minute, so detail fetches go out in small
# batches with a pause between them.
DEFAULT_BATCH_SIZE = 10
DEFAULT_BATCH_DELAY_SECONDS = 0.2

# Retrying fetcher: attempts per URL and the base of the backoff schedule.
DEFAULT_FETCH_MAX_ATTEMPTS = 3
DEFAULT_FETCH_BASE_DELAY_SECONDS = 1.0
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0

# Response cache: entries younger than the TTL are served as live data, older ones
# only as a fallback when upstream is down.
DEFAULT_CACHE_TTL_SECONDS = 2.0
DEFAULT_CACHE_MAX_ENTRIES = 64

DEFAULT_TOP_MARKET_LIMIT = 10


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _csv(name: str, default: str) -> tuple[str, ...]:
    value = _env(name, default) or ""
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    geckoterminal_api_base: str
    geckoterminal_network: str
    pump_tag: str
    coingecko_api_base: str
    http_timeout_seconds: float
    fetch_max_attempts: int
    fetch_base_delay_seconds: float
    batch_size: int
    batch_delay_seconds: float
    cache_ttl_seconds: float
    cache_max_entries: int
    poll_interval_seconds: float
    poll_periods: tuple[str, ...]
    top_market_limit: int
    log_level: str


def get_settings() -> Settings:
    return Settings(
        geckoterminal_api_base=_env("GECKOTERMINAL_API_BASE", "https://app.geckoterminal.com/api/p1"),
        geckoterminal_network=_env("GECKOTERMINAL_NETWORK", "solana"),
        pump_tag=_env("PUMP_TAG", "pump-fun"),
        coingecko_api_base=_env("COINGECKO_API_BASE", "https://api.coingecko.com/api/v3"),
        http_timeout_seconds=float(_env("HTTP_TIMEOUT_SECONDS", str(DEFAULT_HTTP_TIMEOUT_SECONDS))),
        fetch_max_attempts=int(_env("FETCH_MAX_ATTEMPTS", str(DEFAULT_FETCH_MAX_ATTEMPTS))),
        fetch_base_delay_seconds=float(
            _env("FETCH_BASE_DELAY_SECONDS", str(DEFAULT_FETCH_BASE_DELAY_SECONDS))
        ),
        batch_size=int(_env("BATCH_SIZE", str(DEFAULT_BATCH_SIZE))),
        batch_delay_seconds=float(_env("BATCH_DELAY_SECONDS", str(DEFAULT_BATCH_DELAY_SECONDS))),
        cache_ttl_seconds=float(_env("CACHE_TTL_SECONDS", str(DEFAULT_CACHE_TTL_SECONDS))),
        cache_max_entries=int(_env("CACHE_MAX_ENTRIES", str(DEFAULT_CACHE_MAX_ENTRIES))),
        poll_interval_seconds=float(_env("POLL_INTERVAL_SECONDS", "0")),
        poll_periods=_csv("POLL_PERIODS", "24h"),
        top_market_limit=int(_env("TOP_MARKET_LIMIT", str(DEFAULT_TOP_MARKET_LIMIT))),
        log_level=_env("LOG_LEVEL", "INFO"),
    )
