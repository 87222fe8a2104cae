"""RoadStatic Eviction Policy - Abstract Eviction Interface.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass
class EvictionStats:
    """Eviction policy statistics.

    Attributes:
        evictions: Number of evictions
        accesses: Number of accesses tracked
        promotions: Number of promotions
        current_size: Current tracked entries
        max_size: Maximum entries
    """

    evictions: int = 0
    accesses: int = 0
    promotions: int = 0
    current_size: int = 0
    max_size: int = 0

    @property
    def eviction_rate(self) -> float:
        """Get eviction rate."""
        return self.evictions / self.accesses if self.accesses > 0 else 0.0


class EvictionPolicy(ABC):
    """Abstract base for eviction policies.

    A policy only tracks keys; the owning cache stores the values. When the
    cache is full it asks ``choose_eviction`` for a victim, removes the value
    and reports it back through ``on_evict`` before calling ``on_insert`` for
    the new key. Keys that are still loading are never handed to a policy,
    so they can never be chosen.

    Implementations:
    - LRU: Least Recently Used
    - LFU: Least Frequently Used
    - ARC: Adaptive Replacement Cache

    Example:
        policy = LRUPolicy(max_size=1000)
        policy.on_insert("key1")
        policy.on_access("key1")
        victim = policy.choose_eviction()
        policy.on_evict(victim)
    """

    def __init__(self, max_size: int = 1000):
        """Initialize policy.

        Args:
            max_size: Maximum entries to track
        """
        self.max_size = max_size
        self._stats = EvictionStats(max_size=max_size)

    @abstractmethod
    def on_access(self, key: str) -> None:
        """Record key access.

        Args:
            key: Accessed key
        """
        pass

    @abstractmethod
    def on_insert(self, key: str) -> None:
        """Record key insertion.

        Args:
            key: Inserted key
        """
        pass

    @abstractmethod
    def on_delete(self, key: str) -> None:
        """Forget a key entirely.

        Args:
            key: Deleted key
        """
        pass

    def on_evict(self, key: str) -> None:
        """Record that the cache evicted a key chosen by this policy.

        Policies that keep history about evicted keys override this.

        Args:
            key: Evicted key
        """
        self.on_delete(key)

    @abstractmethod
    def choose_eviction(self) -> Optional[str]:
        """Choose key to evict.

        Returns:
            Key to evict or None
        """
        pass

    def choose_evictions(self, count: int) -> List[str]:
        """Choose and evict multiple keys.

        Args:
            count: Number of keys

        Returns:
            List of evicted keys
        """
        keys = []
        for _ in range(count):
            key = self.choose_eviction()
            if key is None:
                break
            keys.append(key)
            self.on_evict(key)
        return keys

    @abstractmethod
    def clear(self) -> None:
        """Clear all tracked keys."""
        pass

    @abstractmethod
    def contains(self, key: str) -> bool:
        """Check if key is tracked.

        Args:
            key: Key to check

        Returns:
            True if tracked
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """Get number of tracked keys.

        Returns:
            Number of keys
        """
        pass

    def get_stats(self) -> EvictionStats:
        """Get eviction statistics.

        Returns:
            EvictionStats instance
        """
        self._stats.current_size = self.size()
        return self._stats

    def __len__(self) -> int:
        """Get tracked key count."""
        return self.size()

    def __contains__(self, key: str) -> bool:
        """Check if key tracked."""
        return self.contains(key)


__all__ = ["EvictionPolicy", "EvictionStats"]
