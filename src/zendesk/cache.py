"""In-memory read-through cache with per-entry TTL.

Entries expire purely by elapsed time since they were stored and are never
refreshed by reads. Expired entries are dropped lazily by the read that finds
them; there is no background sweep.

Concurrent misses on the same key are not coalesced: every caller that misses
runs its own loader, and the last one to finish wins the slot.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from shared.logging import get_logger

logger = get_logger(__name__)

Clock = Callable[[], float]
Loader = Callable[[], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached value with the clock reading at which it was stored."""
    key: str
    value: Any
    stored_at: float
    ttl: float

    def is_live(self, now: float) -> bool:
        return now - self.stored_at < self.ttl


@dataclass(slots=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    expirations: int = 0


class TTLCache:
    """
    Process-wide TTL cache shared by all requests.

    The lock guards the dictionary only and is never held while a loader
    runs, so loads for different keys proceed independently.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        """
        Initialize the cache.

        Args:
            clock: Monotonic time source in seconds; injectable for tests
        """
        self._clock = clock or time.monotonic
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _lookup(self, key: str) -> Optional[CacheEntry]:
        """Return the live entry for key, dropping it if expired. Caller holds the lock."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_live(self._clock()):
            del self._entries[key]
            self._stats.expirations += 1
            return None
        return entry

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store a value with a fresh timestamp, replacing any existing entry."""
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        entry = CacheEntry(key=key, value=value, stored_at=self._clock(), ttl=ttl)
        with self._lock:
            self._entries[key] = entry

    async def get(self, key: str, ttl: float, loader: Loader) -> Any:
        """
        Return the cached value for key, loading and storing it on a miss.

        Args:
            key: Cache key
            ttl: Time-to-live in seconds for a freshly loaded value
            loader: Coroutine function producing the value on a miss

        Returns:
            The cached or freshly loaded value

        Raises:
            Whatever the loader raises; failed loads are not cached
        """
        with self._lock:
            entry = self._lookup(key)
            if entry is not None:
                self._stats.hits += 1
            else:
                self._stats.misses += 1

        if entry is not None:
            logger.debug("Cache hit", key=key)
            return entry.value

        logger.debug("Cache miss", key=key)
        value = await loader()
        self.set(key, value, ttl)
        return value

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()
        logger.info("Cache cleared")

    def stats(self) -> dict[str, int]:
        """Return hit, miss and expiration counters plus the current size."""
        with self._lock:
            return {
                "hits": self._stats.hits,
                "misses": self._stats.misses,
                "expirations": self._stats.expirations,
                "size": len(self._entries),
            }
