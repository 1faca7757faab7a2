from __future__ import annotations

import json
import logging
import time
from collections import OrderedDict
from threading import Lock
from typing import Any, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


def text_size(value: str) -> int:
    return len(value.encode("utf-8"))


def bytes_size(value: bytes) -> int:
    return len(value)


def json_size(value: Any) -> int:
    """Byte length of the canonical JSON encoding.

    An approximation of the footprint, good enough for a byte budget.
    """
    data = json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    return len(data.encode("utf-8"))


class SizedLRUCache(Generic[V]):
    """In-memory LRU cache bounded by entry count, aggregate size and age.

    Every mutation of the count/size bookkeeping happens under one lock, so
    concurrent writers can never push the cache past either budget.
    """

    def __init__(
        self,
        max_entries: int,
        max_bytes: int,
        ttl_seconds: float,
        size_of: Callable[[V], int],
        name: str = "cache",
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        if max_bytes < 1:
            raise ValueError("max_bytes must be >= 1")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._cache: OrderedDict[str, tuple[float, V, int]] = OrderedDict()
        self._max = max_entries
        self._max_bytes = max_bytes
        self._ttl = ttl_seconds
        self._size_of = size_of
        self._name = name
        self._total = 0
        self._lock = Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_entries(self) -> int:
        return self._max

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def size(self) -> int:
        """Live entry count. Expired entries are purged first."""
        with self._lock:
            self._purge_expired()
            return len(self._cache)

    def __len__(self) -> int:
        """Stored entry count, including expired entries not yet purged."""
        with self._lock:
            return len(self._cache)

    @property
    def calculated_size(self) -> int:
        with self._lock:
            return self._total

    def stats(self) -> tuple[int, int]:
        """Live entry count and aggregate size, taken together."""
        with self._lock:
            self._purge_expired()
            return len(self._cache), self._total

    def get(self, key: str) -> V | None:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            ts, value, _ = entry
            if time.monotonic() - ts > self._ttl:
                self._remove(key)
                return None
            self._cache.move_to_end(key)
            return value

    def set(self, key: str, value: V) -> None:
        size = self._size_of(value)
        with self._lock:
            if key in self._cache:
                self._remove(key)
            if size > self._max_bytes:
                logger.warning(
                    "%s: value for %s is %d bytes, over the %d byte budget; not cached",
                    self._name, key, size, self._max_bytes,
                )
                return
            while self._cache and (
                len(self._cache) >= self._max or self._total + size > self._max_bytes
            ):
                oldest, _ = next(iter(self._cache.items()))
                self._remove(oldest)
            self._cache[key] = (time.monotonic(), value, size)
            self._total += size

    def has(self, key: str) -> bool:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return False
            if time.monotonic() - entry[0] > self._ttl:
                self._remove(key)
                return False
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            if key not in self._cache:
                return False
            self._remove(key)
            return True

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._total = 0

    def keys(self) -> list[str]:
        """Snapshot of the live keys, least recently used first."""
        with self._lock:
            self._purge_expired()
            return list(self._cache)

    def purge_expired(self) -> int:
        with self._lock:
            return self._purge_expired()

    def _remove(self, key: str) -> None:
        _, _, size = self._cache.pop(key)
        self._total -= size

    def _purge_expired(self) -> int:
        now = time.monotonic()
        expired = [k for k, (ts, _, _) in self._cache.items() if now - ts > self._ttl]
        for k in expired:
            self._remove(k)
        return len(expired)
