"""
File Store - JSON File Rate Cache

This module keeps cached rates in a JSON file so repeated command line runs
share the one-week cache. Writes go through a temporary file and an atomic
rename.

File layout:
  {
    "rate:EUR:20200628": {"value": 1.07474, "expires_at": "2020-07-05T10:00:00+00:00"},
    "currencies": {"value": {"EUR": 1, "JPY": 100}, "expires_at": "..."}
  }

Files that USE this module:
- ezvrates.adapters.cache (build_cache for CACHE_BACKEND=file)
- tests.test_cache (unit tests)

Files that this module USES:
- ezvrates.adapters.cache.base (utcnow)
- ezvrates.config (settings.cache_file default path)
- ezvrates.domain.models (CacheEntry)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, Optional, TypeVar, Union

from ezvrates.adapters.cache.base import utcnow
from ezvrates.config import settings
from ezvrates.domain.models import CacheEntry

log = logging.getLogger(__name__)

T = TypeVar("T")


def _entry_to_json(entry: CacheEntry) -> dict:
    return {"value": entry.value, "expires_at": entry.expires_at.isoformat()}


def _entry_from_json(key: str, data: dict) -> CacheEntry:
    expires_at = datetime.fromisoformat(str(data["expires_at"]).replace("Z", "+00:00"))
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return CacheEntry(key=key, value=data["value"], expires_at=expires_at)


class FileCache:
    """
    Cache persisted as a single JSON document.

    Values must be JSON-serializable (floats, dicts of ints, plain dicts).
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.path = Path(path) if path is not None else settings.cache_file
        self._clock = clock
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, CacheEntry]:
        """
        Read all entries from disk.

        A corrupt file is backed up next to the original and treated as empty.
        Individual malformed entries are skipped.
        """
        if not self.path.exists():
            return {}

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            backup_path = self.path.with_suffix(".json.corrupt")
            shutil.copy2(self.path, backup_path)
            self.path.unlink()
            log.warning("Cache file corrupted, backed up to %s: %s", backup_path, e)
            return {}

        if not isinstance(data, dict):
            log.warning("Cache file %s does not hold an object, ignoring it", self.path)
            return {}

        entries: Dict[str, CacheEntry] = {}
        for key, raw in data.items():
            try:
                entries[key] = _entry_from_json(key, raw)
            except (KeyError, ValueError, TypeError) as e:
                log.warning("Dropping malformed cache entry %s: %s", key, e)
        return entries

    def _save(self, entries: Dict[str, CacheEntry]) -> None:
        """Write all entries using temp file + atomic rename."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json.tmp",
            dir=str(self.path.parent),
            text=True,
        )
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(
                    {key: _entry_to_json(entry) for key, entry in entries.items()},
                    f,
                    ensure_ascii=False,
                    indent=2,
                )
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, str(self.path))
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise RuntimeError(f"Failed to save cache file: {e}") from e

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            entry = self._load().get(key)
        if entry is None or entry.is_expired(self._clock()):
            return None
        return entry

    def put(self, key: str, value, ttl: timedelta) -> None:
        """Store value and prune expired entries in the same write."""
        now = self._clock()
        with self._lock:
            entries = {k: e for k, e in self._load().items() if not e.is_expired(now)}
            entries[key] = CacheEntry(key=key, value=value, expires_at=now + ttl)
            self._save(entries)

    def remember(self, key: str, ttl: timedelta, producer: Callable[[], T]) -> T:
        entry = self.get(key)
        if entry is not None:
            log.debug("Cache hit: %s (%s)", key, self.path)
            return entry.value

        log.debug("Cache miss: %s (%s)", key, self.path)
        value = producer()
        self.put(key, value, ttl)
        return value

    def forget(self, key: str) -> None:
        with self._lock:
            entries = self._load()
            if entries.pop(key, None) is not None:
                self._save(entries)

    def clear(self) -> None:
        with self._lock:
            if self.path.exists():
                self.path.unlink()
