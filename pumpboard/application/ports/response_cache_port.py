from __future__ import annotations

from typing import Any, Protocol

from pumpboard.application.dto.response_cache import CachedPayload


class ResponseCachePort(Protocol):
    def get(self, key: str) -> CachedPayload | None:
        ...

    def put(self, key: str, payload: Any) -> None:
        ...
