from __future__ import annotations

from asyncio import Lock
from collections import OrderedDict
from collections.abc import Sequence
import time
from typing import Any, Optional

from .config import COMPLETION_CACHE_TTL_SECONDS


class TTLCache:
    """A bounded in-memory TTL cache with async-safe access.

    Entries expire after ``ttl_seconds``; once ``max_entries`` is reached the
    least recently written entry is evicted.
    """

    def __init__(self, ttl_seconds: float = 300.0, max_entries: int = 1024) -> None:
        self._ttl = ttl_seconds
        self._max_entries = max(1, max_entries)
        self._lock = Lock()
        self._store: OrderedDict[Any, tuple[Any, float]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    async def get(self, key: Any) -> Any | None:
        now = time.monotonic()
        async with self._lock:
            entry = self._store.get(key)
            if not entry:
                self.misses += 1
                return None
            value, expires_at = entry
            if expires_at <= now:
                self._store.pop(key, None)
                self.misses += 1
                return None
            self.hits += 1
            return value

    async def set(self, key: Any, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = self._ttl if ttl_seconds is None else ttl_seconds
        expires_at = time.monotonic() + max(ttl, 0.0)
        async with self._lock:
            self._store.pop(key, None)
            if ttl <= 0:
                return
            self._store[key] = (value, expires_at)
            while len(self._store) > self._max_entries:
                self._store.popitem(last=False)

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._store)


def completion_cache_key(
    frames: Sequence[Optional[Sequence[int]]],
    target: int,
    limit: int,
    prefer_realism: bool,
    forbid_first_zero: bool,
) -> tuple:
    """Hashable key for one completion request after notation is parsed."""
    normalized = tuple(tuple(f) if f else None for f in frames)
    return (normalized, target, limit, prefer_realism, forbid_first_zero)


completion_cache = TTLCache(ttl_seconds=float(COMPLETION_CACHE_TTL_SECONDS))
