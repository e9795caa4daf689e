from __future__ import annotations

from dataclasses import dataclass, field

from pumpboard.domain.entities.pool_filters import PoolFilters
from pumpboard.domain.entities.pump_pool import PoolView


SOURCE_LIVE = "live"
SOURCE_CACHE = "cache"
SOURCE_STALE = "stale"


@dataclass(frozen=True)
class ListPumpPoolsInput:
    period: str = "24h"
    use_cache: bool = False
    filters: PoolFilters = field(default_factory=PoolFilters)


@dataclass(frozen=True)
class ListPumpPoolsOutput:
    period: str
    source: str
    data: list[PoolView]
