"""Per-adapter memo cache with per-entry time-to-live."""

import copy
import time
from typing import Any, Callable, Hashable, NamedTuple, Optional

from cachetools import TLRUCache

DEFAULT_CACHE_EXPIRE_MS = 30000

MISS = object()


class _Snapshot(NamedTuple):
    value: Any
    ttl: float


def _time_to_use(key: Hashable, snapshot: _Snapshot, now: float) -> float:
    return now + snapshot.ttl


class MemoCache:
    """Cache-aside layer consulted before the backing store.

    Each entry holds a deep-copied snapshot of the value and its own absolute
    expiry. Expired entries are evicted lazily when a lookup misses. Entries
    are advisory: they are not tied to the lifetime of the stored envelope.

    Example:
        >>> cache = MemoCache()
        >>> cache.set("user:1", {"name": "Ada"}, ttl_ms=5000)
        >>> cache.get("user:1")
        {'name': 'Ada'}
    """

    def __init__(
        self,
        maxsize: int = 10000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            maxsize: Maximum number of entries; the soonest-expiring entry is
                dropped when full
            timer: Monotonic clock in seconds
        """
        self._cache: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=timer)

    def get(self, key: str, default: Any = MISS) -> Any:
        """Return a snapshot of the cached value, or ``default`` on a miss."""
        try:
            snapshot = self._cache[key]
        except KeyError:
            self._cache.expire()
            return default
        return copy.deepcopy(snapshot.value)

    def set(self, key: str, value: Any, ttl_ms: Optional[int] = None) -> None:
        """Insert or overwrite an entry expiring ``ttl_ms`` from now."""
        ttl_ms = DEFAULT_CACHE_EXPIRE_MS if ttl_ms is None else ttl_ms
        self._cache[key] = _Snapshot(copy.deepcopy(value), ttl_ms / 1000.0)

    def has(self, key: str) -> bool:
        return key in self._cache

    def delete(self, key: str) -> None:
        try:
            del self._cache[key]
        except KeyError:
            # absent, or already past its expiry (removed all the same)
            pass

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        self._cache.expire()
        return len(self._cache)

    def __contains__(self, key: object) -> bool:
        return key in self._cache
