from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
import logging
from typing import Any

import httpx


logger = logging.getLogger(__name__)


BROWSER_HEADERS = {
    "Accept": "application/json",
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Referer": "https://www.geckoterminal.com/",
}

CHALLENGE_STATUSES = frozenset({403, 503})
RATE_LIMIT_STATUS = 429


class UpstreamError(RuntimeError):
    pass


class TransientUpstreamError(UpstreamError):
    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PermanentUpstreamError(UpstreamError):
    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamPayloadError(UpstreamError):
    pass


class RetryExhaustedError(UpstreamError):
    def __init__(self, url: str, attempts: int, last_error: Exception | None = None):
        super().__init__(f"Request failed after {attempts} attempts: {url} ({last_error})")
        self.url = url
        self.attempts = attempts
        self.last_error = last_error


@dataclass(frozen=True)
class RetryingFetcherSettings:
    max_attempts: int
    base_delay_seconds: float
    timeout_seconds: float
    headers: dict = field(default_factory=lambda: dict(BROWSER_HEADERS))


class RetryingFetcher:
    """GET a JSON document, retrying challenges, rate limits and transient failures.

    Backoff for attempt ``i`` (0-based): ``base * (i + 1)`` after a 403/503 challenge,
    ``base * 2**i`` after a 429 or any other failure. Nothing is slept after the last
    attempt. Holds no per-request state, so one instance is shared by all callers.
    """

    def __init__(
        self,
        settings: RetryingFetcherSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._settings = settings
        self._transport = transport
        self._sleep = sleep

    async def fetch_json(self, url: str, *, params: dict | None = None) -> Any:
        attempts = max(1, self._settings.max_attempts)
        base = self._settings.base_delay_seconds
        last_exc: Exception | None = None

        for attempt in range(attempts):
            try:
                return await self._get_json(url, params=params)
            except TransientUpstreamError as exc:
                last_exc = exc
                if exc.status_code in CHALLENGE_STATUSES:
                    delay = base * (attempt + 1)
                else:
                    delay = base * (2**attempt)
            except PermanentUpstreamError as exc:
                last_exc = exc
                delay = base * (2**attempt)

            if attempt == attempts - 1:
                break
            logger.warning(
                "http_fetcher: retry attempt=%s/%s delay=%.2f url=%s error=%s",
                attempt + 1,
                attempts,
                delay,
                url,
                last_exc,
            )
            await self._sleep(delay)

        raise RetryExhaustedError(url, attempts, last_exc) from last_exc

    async def _get_json(self, url: str, *, params: dict | None) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.timeout_seconds,
                headers=self._settings.headers,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise TransientUpstreamError(f"HTTP error: {exc}") from exc

        status = response.status_code
        if status in CHALLENGE_STATUSES:
            raise TransientUpstreamError(f"Challenge response {status}", status_code=status)
        if status == RATE_LIMIT_STATUS:
            raise TransientUpstreamError("Rate limited", status_code=status)
        if not response.is_success:
            raise PermanentUpstreamError(f"API error: {status}", status_code=status)

        try:
            return response.json()
        except ValueError as exc:
            raise PermanentUpstreamError(f"Malformed JSON body: {exc}", status_code=status) from exc
