"""Short-lived in-process cache for list/read queries.

Entries are keyed by ``(entity, filters)`` and expire after the configured
TTL. Mutations call :func:`invalidate` with every entity they touch so stale
rows are never served past a write made through the API.
"""

import logging
import threading
import time
from typing import Any, Callable, Hashable

from backend.app.core.settings import get_settings

logger = logging.getLogger(__name__)

# Reads that join across tables are cached under the entity that owns the
# query, so a write to any of the joined tables must drop them as well.
DEPENDENT_ENTITIES: dict[str, tuple[str, ...]] = {
    "branches": ("dashboard", "schedule"),
    "students": ("dashboard", "schedule"),
    "coaches": ("dashboard", "schedule"),
    "sessions": ("dashboard", "schedule"),
    "attendance": ("schedule",),
    "time_records": ("dashboard",),
}


class QueryCache:
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[str, Hashable], tuple[float, Any]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _freeze(filters: dict | None) -> Hashable:
        return tuple(sorted((filters or {}).items()))

    def get_or_load(self, entity: str, filters: dict | None, loader: Callable[[], Any]) -> Any:
        key = (entity, self._freeze(filters))
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] > now:
                return entry[1]
        value = loader()
        if self.ttl_seconds > 0:
            with self._lock:
                self._entries[key] = (now + self.ttl_seconds, value)
        return value

    def invalidate(self, *entities: str) -> None:
        targets = set(entities)
        for entity in entities:
            targets.update(DEPENDENT_ENTITIES.get(entity, ()))
        with self._lock:
            stale = [key for key in self._entries if key[0] in targets]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug("Invalidated %d cached queries for %s", len(stale), sorted(targets))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


query_cache = QueryCache(ttl_seconds=get_settings().query_cache_ttl_seconds)


def invalidate(*entities: str) -> None:
    query_cache.invalidate(*entities)
