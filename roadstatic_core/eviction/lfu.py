"""RoadStatic LFU Policy - Least Frequently Used Eviction.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import threading
from collections import OrderedDict, defaultdict
from typing import DefaultDict, Dict, Optional

from roadstatic_core.eviction.policy import EvictionPolicy


class LFUPolicy(EvictionPolicy):
    """Least Frequently Used eviction policy.

    Evicts the key with the lowest access frequency. Ties are broken by
    recency: within one frequency the least recently promoted key goes first.

    Implementation:
    - Tracks frequency count per key
    - Groups keys by frequency in insertion-ordered buckets
    - Evicts from the lowest non-empty frequency bucket

    Example:
        policy = LFUPolicy(max_size=1000)
        policy.on_insert("key1")
        policy.on_access("key1")  # freq=2
        victim = policy.choose_eviction()
    """

    def __init__(self, max_size: int = 1000):
        super().__init__(max_size)

        # Key -> frequency count
        self._frequency: Dict[str, int] = {}

        # Frequency -> keys, oldest first
        self._freq_to_keys: DefaultDict[int, OrderedDict[str, bool]] = defaultdict(OrderedDict)

        self._min_freq = 0
        self._lock = threading.RLock()

    def _unlink(self, key: str, freq: int) -> None:
        bucket = self._freq_to_keys[freq]
        bucket.pop(key, None)
        if not bucket:
            del self._freq_to_keys[freq]

    def on_access(self, key: str) -> None:
        with self._lock:
            self._stats.accesses += 1

            freq = self._frequency.get(key)
            if freq is None:
                return

            self._unlink(key, freq)
            if self._min_freq == freq and freq not in self._freq_to_keys:
                self._min_freq = freq + 1

            self._frequency[key] = freq + 1
            self._freq_to_keys[freq + 1][key] = True
            self._stats.promotions += 1

    def on_insert(self, key: str) -> None:
        with self._lock:
            old = self._frequency.get(key)
            if old is not None:
                self._unlink(key, old)
            self._frequency[key] = 1
            self._freq_to_keys[1][key] = True
            self._min_freq = 1
            self._stats.current_size = len(self._frequency)

    def on_delete(self, key: str) -> None:
        with self._lock:
            freq = self._frequency.pop(key, None)
            if freq is None:
                return
            self._unlink(key, freq)
            self._stats.current_size = len(self._frequency)

    def choose_eviction(self) -> Optional[str]:
        """Choose LFU key to evict.

        Returns:
            Least frequent key or None
        """
        with self._lock:
            if not self._frequency:
                return None

            if self._min_freq not in self._freq_to_keys:
                self._min_freq = min(self._freq_to_keys)

            key = next(iter(self._freq_to_keys[self._min_freq]))
            self._stats.evictions += 1
            return key

    def clear(self) -> None:
        with self._lock:
            self._frequency.clear()
            self._freq_to_keys.clear()
            self._min_freq = 0
            self._stats.current_size = 0

    def contains(self, key: str) -> bool:
        return key in self._frequency

    def size(self) -> int:
        return len(self._frequency)

    def get_frequency(self, key: str) -> int:
        """Get access frequency for key.

        Args:
            key: Key to check

        Returns:
            Frequency count or 0
        """
        return self._frequency.get(key, 0)

    def __repr__(self) -> str:
        return f"LFUPolicy(size={len(self._frequency)}, min_freq={self._min_freq})"


__all__ = ["LFUPolicy"]
