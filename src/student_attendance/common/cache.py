from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Hashable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueryCache:
    """Query-result cache keyed by (kind, params).

    ``kind`` names the entity set (students, subjects, attendance) and
    ``params`` is any hashable filter. Writers call :meth:`invalidate` with the
    kind they touched so later reads hit the database again.

    ``ttl_seconds=0`` keeps entries until they are invalidated. A load that
    overlaps an invalidation of its kind is returned but not stored.
    """

    def __init__(self, *, ttl_seconds: float = 0, clock: Callable[[], float] = time.monotonic):
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._entries: dict[tuple[str, Hashable], tuple[float, Any]] = {}
        self._generations: dict[str, int] = {}
        self._clears = 0
        self._lock = threading.RLock()

    def get_or_load(self, kind: str, params: Hashable, loader: Callable[[], T]) -> T:
        key = (kind, params)
        with self._lock:
            hit = self._entries.get(key)
            if hit is not None and not self._expired(hit[0]):
                return hit[1]
            generation = self._generation(kind)

        logger.debug("query cache miss kind=%s params=%r", kind, params)
        value = loader()
        with self._lock:
            if self._generation(kind) == generation:
                self._entries[key] = (self._clock(), value)
            else:
                logger.debug("query cache dropped stale load kind=%s params=%r", kind, params)
        return value

    def invalidate(self, kind: str) -> int:
        with self._lock:
            self._generations[kind] = self._generations.get(kind, 0) + 1
            stale = [key for key in self._entries if key[0] == kind]
            for key in stale:
                del self._entries[key]
        logger.debug("query cache invalidated kind=%s entries=%d", kind, len(stale))
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._clears += 1
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _generation(self, kind: str) -> tuple[int, int]:
        return self._clears, self._generations.get(kind, 0)

    def _expired(self, stored_at: float) -> bool:
        return self._ttl > 0 and (self._clock() - stored_at) >= self._ttl
