"""
Cache Adapters - Rate Cache Stores

This package contains the stores usable as the rates service cache.
All of them implement the RateCache protocol.
"""
from pathlib import Path
from typing import Optional, Union

from ezvrates.adapters.cache.base import RateCache
from ezvrates.adapters.cache.file_store import FileCache
from ezvrates.adapters.cache.memory import MemoryCache
from ezvrates.config import settings


def build_cache(
    backend: Optional[str] = None,
    path: Optional[Union[str, Path]] = None,
) -> RateCache:
    """
    Create the cache store selected by CACHE_BACKEND.

    Args:
        backend: 'memory' or 'file' (defaults to settings.cache_backend)
        path: Cache file for the file backend (defaults to settings.cache_file)
    """
    backend = (backend or settings.cache_backend).lower()
    if backend == "file":
        return FileCache(path)
    if backend == "memory":
        return MemoryCache()
    raise ValueError(f"Unknown cache backend: {backend}")


__all__ = [
    "RateCache",
    "MemoryCache",
    "FileCache",
    "build_cache",
]
