from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .types import NewsBatch

BUCKET_SECONDS = 60 * 60
DEFAULT_TTL_SECONDS = 5 * 60
# Buckets kept behind the newest one written; older hours are never read again.
RETAINED_PAST_BUCKETS = 1


@dataclass(frozen=True)
class CacheEntry:
    bucket_key: str
    data: NewsBatch
    fetched_at: float

    def age(self, now: float) -> float:
        return now - self.fetched_at


def _bucket_index(key: str) -> Optional[int]:
    _, _, suffix = key.rpartition("-")
    try:
        return int(suffix)
    except ValueError:
        return None


def _evict_before(store: Dict[str, Any], key: str) -> None:
    """Drop hour buckets older than the ones retained behind `key`. Caller holds the lock."""
    newest = _bucket_index(key)
    if newest is None:
        return
    for old in list(store):
        idx = _bucket_index(old)
        if idx is not None and idx < newest - RETAINED_PAST_BUCKETS:
            del store[old]


class NewsCache:
    """In-memory store of fetched batches keyed by wall-clock hour.

    An entry is fresh only while it is younger than `ttl_seconds`, whatever
    its bucket. Stale entries are kept so the fetcher can fall back to them
    when the provider rate-limits us. Buckets older than the previous hour are
    dropped as newer ones are written.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl_seconds = float(ttl_seconds)
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._bucket_locks: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def now(self) -> float:
        return float(self.clock())

    def bucket_key(self, now: Optional[float] = None) -> str:
        ts = self.now() if now is None else float(now)
        return f"news-{int(ts // BUCKET_SECONDS)}"

    def get_fresh(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.age(self.now()) >= self.ttl_seconds:
            return None
        return entry

    def get_any(self, key: str) -> Optional[CacheEntry]:
        """Entry for `key` regardless of age (degraded fallback)."""
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, data: NewsBatch) -> CacheEntry:
        entry = CacheEntry(bucket_key=key, data=data, fetched_at=self.now())
        with self._lock:
            self._entries[key] = entry
            _evict_before(self._entries, key)
        return entry

    def bucket_lock(self, key: str) -> threading.Lock:
        """Lock serializing provider calls for one bucket."""
        with self._lock:
            lock = self._bucket_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._bucket_locks[key] = lock
                _evict_before(self._bucket_locks, key)
            return lock

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._bucket_locks.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
