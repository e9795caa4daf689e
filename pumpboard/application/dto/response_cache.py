from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CachedPayload:
    payload: Any
    stored_at: float
    is_fresh: bool
