from __future__ import annotations

import asyncio
import logging

from pumpboard.application.dto.pump_pools import (
    SOURCE_CACHE,
    SOURCE_LIVE,
    SOURCE_STALE,
    ListPumpPoolsInput,
    ListPumpPoolsOutput,
)
from pumpboard.application.ports.pump_pool_port import PumpPoolPort
from pumpboard.application.ports.response_cache_port import ResponseCachePort
from pumpboard.application.services.batch_scheduler import Sleep, run_in_batches
from pumpboard.domain.entities.pump_pool import PERIODS, PoolListing, PoolSummary, PoolView
from pumpboard.domain.exceptions import (
    PumpPoolsInputError,
    PumpPoolsUnavailableError,
    UpstreamUnavailableError,
)
from pumpboard.domain.services.pool_view import (
    apply_filters,
    merge_pool_view,
    sort_by_change,
    unique_by_id,
)


logger = logging.getLogger(__name__)


def pump_pools_cache_key(period: str) -> str:
    return f"pump-fun-{period}"


class ListPumpPoolsUseCase:
    def __init__(
        self,
        *,
        pump_pool_port: PumpPoolPort,
        cache_port: ResponseCachePort,
        batch_size: int,
        batch_delay_seconds: float,
        sleep: Sleep = asyncio.sleep,
    ):
        self._pump_pool_port = pump_pool_port
        self._cache_port = cache_port
        self._batch_size = batch_size
        self._batch_delay_seconds = batch_delay_seconds
        self._sleep = sleep

    async def execute(self, command: ListPumpPoolsInput) -> ListPumpPoolsOutput:
        if command.period not in PERIODS:
            raise PumpPoolsInputError(
                f"period must be one of: {', '.join(PERIODS)}."
            )

        cache_key = pump_pools_cache_key(command.period)
        if command.use_cache:
            cached = self._cache_port.get(cache_key)
            if cached is not None and cached.is_fresh:
                return self._output(command, SOURCE_CACHE, cached.payload)

        try:
            views = await self._build_views(command.period)
        except UpstreamUnavailableError as exc:
            stale = self._cache_port.get(cache_key)
            if stale is None:
                raise PumpPoolsUnavailableError(str(exc)) from exc
            logger.warning(
                "list_pump_pools: serving_stale_cache period=%s error=%s",
                command.period,
                exc,
            )
            return self._output(command, SOURCE_STALE, stale.payload)

        self._cache_port.put(cache_key, views)
        return self._output(command, SOURCE_LIVE, views)

    async def _build_views(self, period: str) -> list[PoolView]:
        listing = await self._pump_pool_port.list_pools(period=period)

        async def enrich(pool: PoolSummary) -> PoolView:
            return await self._enrich(pool, listing)

        results = await run_in_batches(
            listing.pools,
            enrich,
            batch_size=self._batch_size,
            delay_seconds=self._batch_delay_seconds,
            sleep=self._sleep,
        )
        views = unique_by_id([view for view in results if view is not None])

        logger.info(
            "list_pump_pools: pipeline_done period=%s listed=%s merged=%s dropped=%s",
            period,
            len(listing.pools),
            len(views),
            len(listing.pools) - len(views),
        )
        return sort_by_change(views, period)

    async def _enrich(self, pool: PoolSummary, listing: PoolListing) -> PoolView:
        detail = await self._pump_pool_port.get_pool_detail(pool_address=pool.address)
        token = listing.tokens.get(pool.base_token_id)
        return merge_pool_view(pool, token, detail)

    @staticmethod
    def _output(
        command: ListPumpPoolsInput,
        source: str,
        views: list[PoolView],
    ) -> ListPumpPoolsOutput:
        return ListPumpPoolsOutput(
            period=command.period,
            source=source,
            data=apply_filters(views, command.filters),
        )
