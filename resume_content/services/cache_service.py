"""
TTL and capacity bounded cache for loaded datasets.
"""

import threading
import time
from typing import Any, Callable, Dict, Optional

from resume_content.models.cache import CacheEntry, CacheStats
from resume_content.utils.logger import get_logger

logger = get_logger(__name__)


DEFAULT_TTL_MS = 5 * 60 * 1000
DEFAULT_MAX_SIZE = 50
DEFAULT_VERSION = "1.0.0"


def epoch_ms() -> int:
    return int(time.time() * 1000)


def cache_key(entity_type: str, language: str) -> str:
    """Key scheme shared by every cache user, e.g. ``resume-en``."""
    return f"{entity_type}-{language}"


class CacheService:
    """
    In-memory cache keyed by ``<entityType>-<language>``.

    Entries expire lazily: staleness (age over ``ttl_ms``) and version
    mismatches are detected on read, at which point the entry is removed.
    When full, the oldest inserted key is evicted, regardless of how
    recently it was read. A lock guards the store so one instance can be
    shared between threads.
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_TTL_MS,
        max_size: int = DEFAULT_MAX_SIZE,
        version: str = DEFAULT_VERSION,
        clock: Callable[[], int] = epoch_ms
    ):
        """
        Initialize cache service.

        Args:
            ttl_ms: Maximum entry age in milliseconds
            max_size: Maximum number of entries
            version: Data version; entries stamped with another version are stale
            clock: Returns the current time in epoch milliseconds
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.ttl_ms = ttl_ms
        self.max_size = max_size
        self.version = version
        self._clock = clock
        self._store: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        logger.debug(f"Cache service initialized (ttl={ttl_ms}ms, max_size={max_size}, version={version})")

    def get(self, key: str) -> Optional[Any]:
        """
        Return cached data, or None when absent, expired or from another version.

        Args:
            key: Cache key

        Returns:
            Cached data or None
        """
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None

            age = self._clock() - entry.timestamp
            if age > self.ttl_ms or entry.version != self.version:
                del self._store[key]
                self._misses += 1
                logger.debug(f"Cache entry '{key}' is stale, removed")
                return None

            self._hits += 1
            return entry.data

    def set(self, key: str, data: Any) -> None:
        """
        Store data under key, evicting the oldest inserted entry when full.

        Args:
            key: Cache key
            data: Data to cache
        """
        with self._lock:
            if key in self._store:
                # Re-setting a key counts as a fresh insertion
                del self._store[key]
            elif len(self._store) >= self.max_size:
                oldest = next(iter(self._store))
                del self._store[oldest]
                self._evictions += 1
                logger.debug(f"Cache full, evicted '{oldest}'")

            self._store[key] = CacheEntry(data=data, timestamp=self._clock(), version=self.version)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
        logger.info("Cache cleared")

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def stats(self) -> CacheStats:
        with self._lock:
            lookups = self._hits + self._misses
            return CacheStats(
                size=len(self._store),
                max_size=self.max_size,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                hit_rate=round(self._hits / lookups, 4) if lookups else 0.0,
            )
