"""Generic LRU cache with hit/miss statistics.

Backs the export memoisation: keys are content fingerprints, so entries
never go stale and no TTL is needed.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .hash import hash_string

T = TypeVar("T")


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Hit rate (0.0 to 1.0)."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hit_rate,
        }


class LRUCache(Generic[T]):
    """
    Bounded least-recently-used cache.

    Examples:
        >>> cache = LRUCache[str](max_size=2)
        >>> cache.set("a", "1")
        >>> cache.get("a")
        '1'
    """

    def __init__(self, max_size: int = 64):
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self._entries: OrderedDict[str, T] = OrderedDict()
        self._stats = Stats(max_size=max_size)

    @staticmethod
    def _compute_key(key: str) -> str:
        return hash_string(key, truncate=16)

    def get(self, key: str) -> T | None:
        """Return the cached value and mark it most recently used."""
        cache_key = self._compute_key(key)
        if cache_key not in self._entries:
            self._stats.misses += 1
            return None

        self._entries.move_to_end(cache_key)
        self._stats.hits += 1
        return self._entries[cache_key]

    def set(self, key: str, value: T) -> None:
        """Store a value, evicting the least recently used entry when full."""
        cache_key = self._compute_key(key)
        self._entries[cache_key] = value
        self._entries.move_to_end(cache_key)

        if len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
            self._stats.evictions += 1

        self._stats.size = len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._stats.size = 0

    @property
    def stats(self) -> Stats:
        return self._stats

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        """Membership check (doesn't update LRU order)."""
        return self._compute_key(key) in self._entries


__all__ = ["LRUCache", "Stats"]
