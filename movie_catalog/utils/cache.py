"""
Response cache for the API client.

Entries are keyed by endpoint + query params and stay fresh for a fixed
number of seconds; once ``max_size`` is reached the least recently used
entry is evicted.

Usage:
    cache = ResponseCache(max_size=200, stale_time=300)
    key = cache.make_key("/api/movies", {"page": 1, "genre": 28})
    data = cache.get(key)
    if data is None:
        data = fetch()
        cache.set(key, data)
"""
from collections import OrderedDict
from typing import Any, Dict, Hashable, Mapping, Optional, Tuple
import logging
import time

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, Tuple[Tuple[str, str], ...]]


class ResponseCache:
    """
    In-memory TTL + LRU cache, one per client instance.

    Args:
        max_size: Entries kept before the least recently used one is dropped
        stale_time: Default freshness window in seconds (None = never stale)
        clock: Monotonic time source, injectable for tests
    """

    def __init__(self, max_size: int = 1000, stale_time: Optional[float] = 300, clock=time.monotonic):
        self._entries: "OrderedDict[Hashable, Tuple[Any, Optional[float]]]" = OrderedDict()
        self.max_size = max_size
        self.stale_time = stale_time
        self._clock = clock
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(endpoint: str, params: Optional[Mapping[str, Any]] = None) -> CacheKey:
        """Param order does not matter: ``{"a": 1, "b": 2}`` and ``{"b": 2, "a": 1}`` share a key"""
        items = tuple(sorted((str(k), str(v)) for k, v in (params or {}).items()))
        return endpoint, items

    def get(self, key: Hashable) -> Optional[Any]:
        """Fresh cached value, or None"""
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None

        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            self.misses += 1
            return None

        self._entries.move_to_end(key)
        self.hits += 1
        return value

    def set(self, key: Hashable, value: Any, ttl: Optional[float] = None) -> None:
        """Store ``value``; ``ttl`` overrides the cache's ``stale_time``"""
        lifetime = ttl if ttl is not None else self.stale_time
        expires_at = self._clock() + lifetime if lifetime is not None else None

        self._entries[key] = (value, expires_at)
        self._entries.move_to_end(key)

        while len(self._entries) > self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted cache entry {evicted}")

    def invalidate(self, endpoint: Optional[str] = None) -> int:
        """
        Drop every entry for ``endpoint`` (all entries when None).

        Returns:
            Number of entries removed
        """
        if endpoint is None:
            removed = len(self._entries)
            self._entries.clear()
        else:
            stale = [key for key in self._entries if isinstance(key, tuple) and key[0] == endpoint]
            for key in stale:
                del self._entries[key]
            removed = len(stale)
        logger.debug(f"Invalidated {removed} cache entries")
        return removed

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> Dict[str, Any]:
        lookups = self.hits + self.misses
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / lookups, 4) if lookups else 0.0,
        }
