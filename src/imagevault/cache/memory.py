"""L1 in-memory LRU cache bounded by total cost and item count."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from imagevault.cache.stats import CacheEntry, CacheStats

logger = logging.getLogger(__name__)

_DEFAULT_MAX_COST = 250_000_000
_DEFAULT_MAX_COUNT = 100


class BoundedCache:
    """Thread-safe in-memory LRU cache with a byte-cost limit and a count limit.

    A limit of 0 disables that limit. An entry whose own cost exceeds
    ``max_cost`` is still stored; it evicts everything else and stays as the
    only entry until something newer arrives.
    """

    def __init__(
        self,
        max_cost: int = _DEFAULT_MAX_COST,
        max_count: int = _DEFAULT_MAX_COUNT,
    ) -> None:
        if max_cost < 0 or max_count < 0:
            raise ValueError("Cache limits must be non-negative")
        self._store: OrderedDict[str, CacheEntry] = OrderedDict()
        self._max_cost = max_cost
        self._max_count = max_count
        self._total_cost = 0
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None
            # Move to end (most recently used)
            self._store.move_to_end(key)
            self._hits += 1
            return entry.data

    def set(self, key: str, data: bytes) -> None:
        entry = CacheEntry(key=key, data=data)
        with self._lock:
            self._remove(key)
            self._store[key] = entry
            self._total_cost += entry.cost
            # The new entry sits at the MRU end and is never its own victim
            while len(self._store) > 1 and self._over_limit():
                self._evict_oldest()

    def remove(self, key: str) -> None:
        with self._lock:
            self._remove(key)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._total_cost = 0

    def keys(self) -> list[str]:
        """Snapshot of cached keys, least- to most-recently used."""
        with self._lock:
            return list(self._store)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                entries=len(self._store),
                total_cost=self._total_cost,
                max_cost=self._max_cost,
                max_count=self._max_count,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
            )

    @property
    def max_cost(self) -> int:
        return self._max_cost

    @property
    def max_count(self) -> int:
        return self._max_count

    @property
    def total_cost(self) -> int:
        with self._lock:
            return self._total_cost

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    # Callers must hold self._lock for everything below.

    def _over_limit(self) -> bool:
        if self._max_cost and self._total_cost > self._max_cost:
            return True
        return bool(self._max_count and len(self._store) > self._max_count)

    def _remove(self, key: str) -> None:
        entry = self._store.pop(key, None)
        if entry is not None:
            self._total_cost -= entry.cost

    def _evict_oldest(self) -> None:
        key, entry = self._store.popitem(last=False)
        self._total_cost -= entry.cost
        self._evictions += 1
        logger.debug("Evicted '%s' (%d bytes) from memory cache", key, entry.cost)
