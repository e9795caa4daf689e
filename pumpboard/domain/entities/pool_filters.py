from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class RangeFilter:
    gte: Decimal | None = None
    lte: Decimal | None = None

    @property
    def is_empty(self) -> bool:
        return self.gte is None and self.lte is None

    def accepts(self, value: Decimal) -> bool:
        if self.gte is not None and value < self.gte:
            return False
        if self.lte is not None and value > self.lte:
            return False
        return True


@dataclass(frozen=True)
class PoolFilters:
    liquidity: RangeFilter = field(default_factory=RangeFilter)
    fdv: RangeFilter = field(default_factory=RangeFilter)
    volume: RangeFilter = field(default_factory=RangeFilter)
    txn: RangeFilter = field(default_factory=RangeFilter)

    @property
    def is_empty(self) -> bool:
        return all(
            item.is_empty for item in (self.liquidity, self.fdv, self.volume, self.txn)
        )
