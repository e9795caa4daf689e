from __future__ import annotations

from pumpboard.application.ports.pump_pool_port import PumpPoolPort
from pumpboard.domain.entities.pump_pool import PoolDetail, PoolListing
from pumpboard.domain.exceptions import UpstreamUnavailableError
from pumpboard.infrastructure.clients.geckoterminal_client import GeckoTerminalClient
from pumpboard.infrastructure.clients.http_fetcher import UpstreamError


class GeckoTerminalPumpPoolAdapter(PumpPoolPort):
    def __init__(self, client: GeckoTerminalClient):
        self._client = client

    async def list_pools(self, *, period: str) -> PoolListing:
        try:
            return await self._client.fetch_pool_listing(period=period)
        except UpstreamError as exc:
            raise UpstreamUnavailableError(str(exc)) from exc

    async def get_pool_detail(self, *, pool_address: str) -> PoolDetail:
        try:
            return await self._client.fetch_pool_detail(pool_address=pool_address)
        except UpstreamError as exc:
            raise UpstreamUnavailableError(str(exc)) from exc
