from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

Sleep = Callable[[float], Awaitable[None]]


def partition(items: Sequence[T], batch_size: int) -> list[list[T]]:
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1.")
    return [list(items[start : start + batch_size]) for start in range(0, len(items), batch_size)]


async def _run_isolated(enrich: Callable[[T], Awaitable[R]], item: T, index: int) -> R | None:
    try:
        return await enrich(item)
    except Exception as exc:  # noqa: BLE001
        logger.warning("batch_scheduler: item_failed index=%s error=%s", index, exc)
        return None


async def run_in_batches(
    items: Sequence[T],
    enrich: Callable[[T], Awaitable[R]],
    *,
    batch_size: int,
    delay_seconds: float,
    sleep: Sleep = asyncio.sleep,
) -> list[R | None]:
    """Enrich ``items`` in fixed-size batches, returning results in input order.

    Items of one batch run concurrently and the whole batch is awaited before the
    next one starts. ``delay_seconds`` is slept between batches, never after the last.
    An item whose enrichment raises gets ``None`` in its slot.
    """
    batches = partition(items, batch_size)
    results: list[R | None] = []

    for batch_index, batch in enumerate(batches):
        offset = batch_index * batch_size
        batch_results = await asyncio.gather(
            *(
                _run_isolated(enrich, item, offset + position)
                for position, item in enumerate(batch)
            )
        )
        results.extend(batch_results)

        if batch_index < len(batches) - 1 and delay_seconds > 0:
            await sleep(delay_seconds)

    logger.debug(
        "batch_scheduler: done items=%s batches=%s failed=%s",
        len(items),
        len(batches),
        sum(1 for result in results if result is None),
    )
    return results
