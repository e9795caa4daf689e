from __future__ import annotations

import asyncio

import httpx
import pytest

from pumpboard.infrastructure.clients.http_fetcher import (
    BROWSER_HEADERS,
    RetryExhaustedError,
    RetryingFetcher,
    RetryingFetcherSettings,
)


URL = "https://upstream.test/api/p1/tags/pump-fun/pools"


class ScriptedUpstream:
    def __init__(self, responses: list[httpx.Response | Exception]):
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests) - 1, len(self._responses) - 1)
        scripted = self._responses[index]
        if isinstance(scripted, Exception):
            raise scripted
        return scripted


def _make_fetcher(
    upstream: ScriptedUpstream,
    delays: list[float],
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
) -> RetryingFetcher:
    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    return RetryingFetcher(
        RetryingFetcherSettings(
            max_attempts=max_attempts,
            base_delay_seconds=base_delay,
            timeout_seconds=5,
        ),
        transport=httpx.MockTransport(upstream),
        sleep=fake_sleep,
    )


@pytest.mark.parametrize("rate_limited", [0, 1, 2, 4])
def test_rate_limited_k_times_succeeds_on_attempt_k_plus_one(rate_limited: int):
    upstream = ScriptedUpstream(
        [httpx.Response(429) for _ in range(rate_limited)]
        + [httpx.Response(200, json={"data": []})]
    )
    delays: list[float] = []
    fetcher = _make_fetcher(upstream, delays, max_attempts=5, base_delay=0.5)

    payload = asyncio.run(fetcher.fetch_json(URL))

    assert payload == {"data": []}
    assert len(upstream.requests) == rate_limited + 1
    assert delays == [0.5 * 2**attempt for attempt in range(rate_limited)]


def test_always_500_fails_after_max_attempts():
    upstream = ScriptedUpstream([httpx.Response(500)])
    delays: list[float] = []
    fetcher = _make_fetcher(upstream, delays, max_attempts=4, base_delay=1.0)

    with pytest.raises(RetryExhaustedError) as exc_info:
        asyncio.run(fetcher.fetch_json(URL))

    assert len(upstream.requests) == 4
    assert exc_info.value.attempts == 4
    assert exc_info.value.url == URL
    assert delays == [1.0, 2.0, 4.0]


def test_challenge_statuses_back_off_linearly():
    upstream = ScriptedUpstream(
        [httpx.Response(403), httpx.Response(503), httpx.Response(200, json={"ok": True})]
    )
    delays: list[float] = []
    fetcher = _make_fetcher(upstream, delays, base_delay=2.0)

    assert asyncio.run(fetcher.fetch_json(URL)) == {"ok": True}
    assert delays == [2.0, 4.0]


def test_malformed_json_is_retried():
    upstream = ScriptedUpstream(
        [
            httpx.Response(200, content=b"<html>challenge</html>"),
            httpx.Response(200, json=[1, 2, 3]),
        ]
    )
    delays: list[float] = []
    fetcher = _make_fetcher(upstream, delays)

    assert asyncio.run(fetcher.fetch_json(URL)) == [1, 2, 3]
    assert len(upstream.requests) == 2
    assert delays == [1.0]


def test_transport_error_is_retried_then_exhausted():
    upstream = ScriptedUpstream([httpx.ConnectTimeout("timed out")])
    delays: list[float] = []
    fetcher = _make_fetcher(upstream, delays, max_attempts=2)

    with pytest.raises(RetryExhaustedError) as exc_info:
        asyncio.run(fetcher.fetch_json(URL))

    assert len(upstream.requests) == 2
    assert "timed out" in str(exc_info.value.last_error)


def test_sends_browser_headers_and_query_params():
    upstream = ScriptedUpstream([httpx.Response(200, json={})])
    fetcher = _make_fetcher(upstream, [])

    asyncio.run(fetcher.fetch_json(URL, params={"sort": "-1h_trend_score"}))

    request = upstream.requests[0]
    assert request.method == "GET"
    assert request.headers["accept"] == "application/json"
    assert request.headers["user-agent"] == BROWSER_HEADERS["User-Agent"]
    assert request.headers["referer"] == "https://www.geckoterminal.com/"
    assert request.url.params["sort"] == "-1h_trend_score"


def test_decoding_error_is_retried_then_exhausted():
    upstream = ScriptedUpstream([httpx.DecodingError("corrupt gzip body")])
    delays: list[float] = []
    fetcher = _make_fetcher(upstream, delays, max_attempts=3)

    with pytest.raises(RetryExhaustedError) as exc_info:
        asyncio.run(fetcher.fetch_json(URL))

    assert len(upstream.requests) == 3
    assert delays == [1.0, 2.0]
    assert "corrupt gzip body" in str(exc_info.value.last_error)
