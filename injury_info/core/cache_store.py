"""
In-memory cache of computed query results. Keyed by query signature; every entry
carries its insertion timestamp (epoch ms) and freshness is decided at read time.

One CacheStore instance per tier (aggregation, façade); instances are created at
startup and passed in, never module globals.
"""

import copy
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the moment (epoch ms) it was stored."""

    key: str
    data: Any
    timestamp: int


def make_cache_key(operation: str, **arguments: Any) -> str:
    """
    Stable signature for a logical query: operation name plus its arguments,
    sorted by name, with strings lowercased and stripped. None becomes "*".
    """
    parts = [operation]
    for name in sorted(arguments):
        value = arguments[name]
        if value is None:
            normalized = "*"
        elif isinstance(value, str):
            normalized = value.strip().lower() or "*"
        else:
            normalized = str(value)
        parts.append(f"{name}={normalized}")
    return "|".join(parts)


class CacheStore:
    """
    Thread-safe key/value store with read-time TTL checks and last-writer-wins writes.

    Values are copied on set and on get, so callers never share an entry.
    """

    def __init__(self, name: str = "cache", clock: Callable[[], float] = time.time) -> None:
        self.name = name
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def get(self, key: str, ttl_ms: int) -> Any | None:
        """
        Return cached data if it is younger than ttl_ms, else None.
        Stale entries stay in place until overwritten or cleared.
        """
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            logger.info("[cache:%s] MISS key=%s", self.name, key)
            return None
        age = self._now_ms() - entry.timestamp
        if age >= ttl_ms:
            logger.info("[cache:%s] STALE key=%s age_ms=%d ttl_ms=%d", self.name, key, age, ttl_ms)
            return None
        logger.info("[cache:%s] HIT key=%s age_ms=%d", self.name, key, age)
        return copy.deepcopy(entry.data)

    def set(self, key: str, data: Any) -> None:
        """Store data under key with the current timestamp, replacing any previous entry."""
        entry = CacheEntry(key=key, data=copy.deepcopy(data), timestamp=self._now_ms())
        with self._lock:
            self._entries[key] = entry
        logger.info("[cache:%s] SET key=%s", self.name, key)

    def clear(self) -> int:
        """Drop all entries. Returns how many were removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        logger.info("[cache:%s] cleared %d entries", self.name, removed)
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
