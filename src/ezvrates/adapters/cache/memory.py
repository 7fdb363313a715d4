"""
In-Memory Cache - Process-local Rate Cache

Keeps CacheEntry objects in a dict guarded by a lock. Entries live until
their TTL passes or the process exits.

Files that USE this module:
- ezvrates.adapters.cache (build_cache for CACHE_BACKEND=memory)
- tests.test_cache (unit tests)

Files that this module USES:
- ezvrates.adapters.cache.base (utcnow)
- ezvrates.domain.models (CacheEntry)
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, TypeVar

from ezvrates.adapters.cache.base import utcnow
from ezvrates.domain.models import CacheEntry

log = logging.getLogger(__name__)

T = TypeVar("T")


class MemoryCache:
    """Dictionary-backed cache with TTL-based expiry."""

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the live entry for key, dropping it if expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return None
            return entry

    def put(self, key: str, value, ttl: timedelta) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(key=key, value=value, expires_at=self._clock() + ttl)

    def remember(self, key: str, ttl: timedelta, producer: Callable[[], T]) -> T:
        """
        Return the cached value for key, or produce and store it.

        The producer runs outside the lock; exceptions propagate and nothing
        is stored.
        """
        entry = self.get(key)
        if entry is not None:
            log.debug("Cache hit: %s", key)
            return entry.value

        log.debug("Cache miss: %s", key)
        value = producer()
        self.put(key, value, ttl)
        return value

    def forget(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
