"""
Cache Interface - Contract for Rate Cache Stores

The rates service only needs `remember`: return the cached value for a key
if it is present and unexpired, otherwise call the producer, store its
result for ttl and return it.

Files that USE this module:
- ezvrates.adapters.cache.memory (MemoryCache)
- ezvrates.adapters.cache.file_store (FileCache)
- ezvrates.application.rates_service (type of the injected cache)

Files that this module USES:
- None (pure interface definition)
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol, TypeVar

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RateCache(Protocol):
    """Protocol for key-value stores with per-entry expiry."""

    def remember(self, key: str, ttl: timedelta, producer: Callable[[], T]) -> T:
        ...

    def forget(self, key: str) -> None:
        ...

    def clear(self) -> None:
        ...
