#!/usr/bin/env python3
"""
Snapshot Cache

Time-bounded cache for bulk-loaded snapshots (order sheets, verification
exports, delivery registries). The cache is an ordinary object owned by the
caller; the clock is injected so expiry can be driven deterministically.
"""

import logging
import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: Any
    stored_at: float


class SnapshotCache:
    """
    TTL cache keyed by any hashable value.

    Entries older than `ttl_seconds` are treated as missing on read and are
    dropped by `evict_expired()`. Nothing is evicted in the background.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[Hashable, _Entry] = {}

    def _is_fresh(self, entry: _Entry) -> bool:
        return self._clock() - entry.stored_at < self.ttl_seconds

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the cached value, or `default` if absent or expired."""
        entry = self._entries.get(key)
        if entry is None or not self._is_fresh(entry):
            return default
        return entry.value

    def put(self, key: Hashable, value: Any) -> None:
        """Store a value, replacing any previous entry for the key."""
        self._entries[key] = _Entry(value=value, stored_at=self._clock())

    def __contains__(self, key: Hashable) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._is_fresh(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def evict(self, key: Hashable) -> bool:
        """Drop one entry. Returns True if something was removed."""
        return self._entries.pop(key, None) is not None

    def evict_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        expired = [key for key, entry in self._entries.items() if not self._is_fresh(entry)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Evicted %d expired snapshot(s)", len(expired))
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()
