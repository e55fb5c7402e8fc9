#!/usr/bin/env python3
"""Tests for the snapshot cache."""

import pytest

from sourcing.core.cache import SnapshotCache


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestSnapshotCache:
    """Test TTL behavior with an injected clock."""

    def setup_method(self):
        self.clock = FakeClock()
        self.cache = SnapshotCache(ttl_seconds=10, clock=self.clock)

    def test_get_fresh_entry(self):
        """Test that a stored value is returned before it expires."""
        self.cache.put("orders", [1, 2, 3])
        self.clock.now = 9.9

        assert self.cache.get("orders") == [1, 2, 3]
        assert "orders" in self.cache

    def test_entry_expires_at_ttl(self):
        """Test that an entry is treated as missing once the TTL has elapsed."""
        self.cache.put("orders", [1])
        self.clock.now = 10

        assert self.cache.get("orders") is None
        assert self.cache.get("orders", default=[]) == []
        assert "orders" not in self.cache

    def test_put_refreshes_timestamp(self):
        """Test that replacing an entry restarts its lifetime."""
        self.cache.put("orders", "old")
        self.clock.now = 8
        self.cache.put("orders", "new")
        self.clock.now = 15

        assert self.cache.get("orders") == "new"

    def test_evict_expired(self):
        """Test that only expired entries are dropped."""
        self.cache.put("a", 1)
        self.clock.now = 5
        self.cache.put("b", 2)
        self.clock.now = 12

        assert len(self.cache) == 2
        assert self.cache.evict_expired() == 1
        assert len(self.cache) == 1
        assert self.cache.get("b") == 2

    def test_evict_and_clear(self):
        """Test explicit eviction."""
        self.cache.put("a", 1)
        self.cache.put("b", 2)

        assert self.cache.evict("a") is True
        assert self.cache.evict("a") is False
        self.cache.clear()
        assert len(self.cache) == 0

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_rejects_non_positive_ttl(self, ttl):
        """Test that the TTL must be positive."""
        with pytest.raises(ValueError):
            SnapshotCache(ttl_seconds=ttl)
