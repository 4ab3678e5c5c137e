"""
TTL Cache

Small key-value cache with per-entry expiry, used to avoid re-fetching product
records on every date-range change. Instances are created by the caller and
injected into the services that need them.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class CacheItem:
    """A cached value with the time it was stored and its lifetime"""
    data: Any
    timestamp: float
    expiry: float

    def is_expired(self, now: float) -> bool:
        return now > self.timestamp + self.expiry


class TTLCache:
    """Time-boxed cache; expiry is checked when an entry is read."""

    def __init__(self, default_ttl_seconds: float = 300,
                 clock: Callable[[], float] = time.monotonic):
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._items: Dict[str, CacheItem] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value, or default when missing or expired"""
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return default
            if item.is_expired(self._clock()):
                logger.debug(f"Cache entry expired: {key}")
                del self._items[key]
                return default
            return item.data

    def set(self, key: str, data: Any, ttl_seconds: Optional[float] = None) -> None:
        expiry = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._items[key] = CacheItem(data=data, timestamp=self._clock(), expiry=expiry)

    def has(self, key: str) -> bool:
        with self._lock:
            item = self._items.get(key)
            return item is not None and not item.is_expired(self._clock())

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every entry whose key starts with prefix; returns how many were dropped"""
        with self._lock:
            keys = [key for key in self._items if key.startswith(prefix)]
            for key in keys:
                del self._items[key]
        if keys:
            logger.debug(f"Invalidated {len(keys)} cache entries with prefix '{prefix}'")
        return len(keys)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for item in self._items.values() if not item.is_expired(now))
