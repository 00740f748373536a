"""In-process response cache with time-to-live expiration."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

Clock = Callable[[], float]


@dataclass
class CacheEntry:
    value: str
    expiry: float


class ResponseCache:
    """Expiring key-value map for rewritten text.

    Entries past their expiry are treated as absent and evicted when looked
    up. ``clock`` returns seconds and defaults to ``time.monotonic``.
    """

    def __init__(self, *, ttl_seconds: float = 60.0, clock: Clock = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        """Return the cached value, or None when missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() > entry.expiry:
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: str) -> None:
        """Store a value that expires ``ttl_seconds`` from now."""
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expiry=self._clock() + self.ttl_seconds)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
