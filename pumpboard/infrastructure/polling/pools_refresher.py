from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from pumpboard.application.dto.pump_pools import ListPumpPoolsInput
from pumpboard.application.use_cases.list_pump_pools import ListPumpPoolsUseCase
from pumpboard.domain.exceptions import DomainError


logger = logging.getLogger(__name__)


class PoolsRefresher:
    """Re-runs the pool pipeline on a fixed interval so the cache stays warm.

    ``start`` spawns the loop as a named task, ``stop`` signals it and waits for the
    task to finish.
    """

    def __init__(
        self,
        *,
        use_case: ListPumpPoolsUseCase,
        periods: Sequence[str],
        interval_seconds: float,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive.")
        self._use_case = use_case
        self._periods = tuple(periods)
        self._interval_seconds = interval_seconds
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self.cycles = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run(), name="pumpboard-pools-refresher")
        logger.info(
            "pools_refresher: started periods=%s interval=%.1fs",
            ",".join(self._periods),
            self._interval_seconds,
        )

    async def stop(self) -> None:
        self._stop_event.set()
        task = self._task
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("pools_refresher: stopped cycles=%s", self.cycles)

    async def refresh_once(self) -> None:
        for period in self._periods:
            try:
                result = await self._use_case.execute(ListPumpPoolsInput(period=period))
            except DomainError as exc:
                logger.warning("pools_refresher: refresh_failed period=%s error=%s", period, exc)
                continue
            except Exception:  # noqa: BLE001
                logger.exception("pools_refresher: refresh_crashed period=%s", period)
                continue
            logger.debug(
                "pools_refresher: refreshed period=%s source=%s records=%s",
                period,
                result.source,
                len(result.data),
            )
        self.cycles += 1

    async def _run(self) -> None:
        while not self._stop_event.is_set():
            await self.refresh_once()
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval_seconds)
            except asyncio.TimeoutError:
                continue
