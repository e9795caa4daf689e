from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable
import logging
from threading import Lock
import time
from typing import Any

from pumpboard.application.dto.response_cache import CachedPayload
from pumpboard.application.ports.response_cache_port import ResponseCachePort


logger = logging.getLogger(__name__)


class ResponseCache(ResponseCachePort):
    """In-memory payload cache with a freshness window and stale reads.

    ``get`` returns entries of any age; ``is_fresh`` tells whether the entry is still
    inside the TTL. The map is bounded by ``max_entries``, evicting the entry written
    least recently.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float,
        max_entries: int = 64,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max(1, max_entries)
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._lock = Lock()

    def get(self, key: str) -> CachedPayload | None:
        now = self._clock()
        with self._lock:
            cached = self._entries.get(key)
            if cached is None:
                return None
            stored_at, payload = cached
        return CachedPayload(
            payload=payload,
            stored_at=stored_at,
            is_fresh=now - stored_at < self.ttl_seconds,
        )

    def put(self, key: str, payload: Any) -> None:
        stored_at = self._clock()
        with self._lock:
            self._entries[key] = (stored_at, payload)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("response_cache: evicted key=%s", evicted)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
