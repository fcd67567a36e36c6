"""
In-process TTL cache for venture reads.

Keys are plain strings; writers drop whole families of keys at once with
:meth:`TTLCache.invalidate` (``cache.invalidate("ventures:")``).  The oldest
entry is evicted first once ``max_size`` is reached.

Share verification does not read from here: activation and expiry must
always come straight from the database.
"""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Optional

from app.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    stored_at: float = field(default_factory=lambda: time.monotonic())

    def is_expired(self, ttl: float) -> bool:
        return time.monotonic() - self.stored_at > ttl


class TTLCache:
    """
    Insertion-ordered cache with per-entry expiry.

    A disabled cache stores nothing and every lookup misses, which lets the
    services keep a single code path regardless of ``CACHE_ENABLED``.
    """

    def __init__(self, ttl: float = 30.0, max_size: int = 1000, enabled: bool = True):
        self.ttl = ttl
        self.max_size = max_size
        self.enabled = enabled
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        entry = self._entries.get(key)
        if entry is not None and entry.is_expired(self.ttl):
            del self._entries[key]
            entry = None
        if entry is None:
            self._misses += 1
            return None
        self._hits += 1
        return entry.value

    def set(self, key: str, value: Any) -> None:
        if not self.enabled:
            return
        if key in self._entries:
            # Refreshing a key keeps its eviction position.
            self._entries[key] = CacheEntry(value)
            return
        while len(self._entries) >= self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("cache evict %s", evicted)
        self._entries[key] = CacheEntry(value)

    def invalidate(self, *prefixes: str) -> int:
        """Drop every key starting with one of ``prefixes``; return how many went."""
        if not self.enabled:
            return 0
        doomed = [key for key in self._entries if key.startswith(prefixes)]
        for key in doomed:
            del self._entries[key]
        if doomed:
            logger.debug("cache invalidated %d key(s) for %s", len(doomed), prefixes)
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()

    def get_stats(self) -> dict:
        """Counters reported by ``/health``."""
        lookups = self._hits + self._misses
        return {
            "enabled": self.enabled,
            "size": len(self._entries),
            "max_size": self.max_size,
            "ttl_seconds": self.ttl,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": f"{self._hits / lookups:.1%}" if lookups else "N/A",
        }


cache = TTLCache(
    ttl=settings.CACHE_TTL,
    max_size=settings.CACHE_MAX_SIZE,
    enabled=settings.CACHE_ENABLED,
)
