"""In-process LRU cache whose entries carry an expiry time."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable

DEFAULT_MAX_SIZE = 5000


@dataclass
class CacheItem:
    """A cached value with the monotonic time at which it expires."""

    key: str
    value: Any
    expires: float

    def expired(self) -> bool:
        return time.monotonic() > self.expires


class LRUCache:
    """Thread-safe LRU cache; the least recently used entries go first."""

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._max_size = max_size
        self._items: OrderedDict[str, CacheItem] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> CacheItem | None:
        """Return the item, expired or not; live items are marked as recent."""
        with self._lock:
            item = self._items.get(key)
            if item is not None and not item.expired():
                self._items.move_to_end(key)
            return item

    def set(self, key: str, value: Any, duration: timedelta) -> None:
        self._store(key, value, duration)

    def delete(self, key: str) -> bool:
        """Remove ``key``; return whether it was present."""
        with self._lock:
            return self._items.pop(key, None) is not None

    def fetch(self, key: str, duration: timedelta, fetch: Callable[[], Any]) -> CacheItem:
        """Return the live item for ``key`` or store what ``fetch`` returns."""
        item = self.get(key)
        if item is not None and not item.expired():
            return item
        return self._store(key, fetch(), duration)

    def _store(self, key: str, value: Any, duration: timedelta) -> CacheItem:
        item = CacheItem(key, value, time.monotonic() + duration.total_seconds())
        with self._lock:
            self._items[key] = item
            self._items.move_to_end(key)
            while len(self._items) > self._max_size:
                self._items.popitem(last=False)
        return item

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)