# core/caching.py
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Tuple

CACHE_DURATION = 900  # 15 minutes
CACHE_MAX_ENTRIES = 500


class TTLCache:
    """
    Bounded in-memory cache with per-entry time-to-live.

    Entries are kept in least-recently-used order: ``get`` refreshes an
    entry, ``set`` on a full cache evicts the oldest untouched one.
    Expired entries are dropped lazily when read.

    Args:
        max_entries: Maximum number of entries kept at once
        ttl: Default time-to-live in seconds
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        max_entries: int = CACHE_MAX_ENTRIES,
        ttl: float = CACHE_DURATION,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl = ttl
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[Any, float]]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            self.misses += 1
            return None

        self._entries.move_to_end(key)
        self.hits += 1
        return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store a value, evicting the least recently used entry when full."""
        duration = self.ttl if ttl is None else ttl
        if key in self._entries:
            self._entries.move_to_end(key)
        else:
            while len(self._entries) >= self.max_entries:
                self._entries.popitem(last=False)
        self._entries[key] = (value, self._clock() + duration)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def purge_expired(self) -> int:
        """
        Drop every expired entry.

        Returns:
            Number of cache entries cleared
        """
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def stats(self) -> Dict[str, Any]:
        """Get statistics about the current cache state."""
        return {
            "total_entries": len(self._entries),
            "max_entries": self.max_entries,
            "ttl": self.ttl,
            "hits": self.hits,
            "misses": self.misses,
        }

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() < entry[1]

    def __len__(self) -> int:
        return len(self._entries)
