from __future__ import annotations

from typing import Protocol

from pumpboard.domain.entities.pump_pool import PoolDetail, PoolListing


class PumpPoolPort(Protocol):
    async def list_pools(self, *, period: str) -> PoolListing:
        ...

    async def get_pool_detail(self, *, pool_address: str) -> PoolDetail:
        ...
