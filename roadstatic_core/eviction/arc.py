"""RoadStatic ARC Policy - Adaptive Replacement Cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Dict, Optional

from roadstatic_core.eviction.policy import EvictionPolicy


class ARCPolicy(EvictionPolicy):
    """Adaptive Replacement Cache eviction policy.

    ARC automatically balances between recency (LRU) and frequency (LFU).
    It maintains four lists:
    - T1: Resident keys seen once recently
    - T2: Resident keys seen at least twice
    - B1: Ghost keys recently evicted from T1
    - B2: Ghost keys recently evicted from T2

    A reload of a B1 ghost grows the T1 target ``p`` (recency is paying off),
    a reload of a B2 ghost shrinks it (frequency is paying off). Under a
    skewed workload the hot keys settle in T2 and a scan of one-off keys only
    churns T1.

    Reference:
        "ARC: A Self-Tuning, Low Overhead Replacement Cache"
        by Nimrod Megiddo and Dharmendra S. Modha

    Example:
        policy = ARCPolicy(max_size=1000)
        policy.on_insert("key1")
        policy.on_access("key1")
        victim = policy.choose_eviction()
        policy.on_evict(victim)
    """

    def __init__(self, max_size: int = 1000):
        """Initialize ARC policy.

        Args:
            max_size: Maximum resident entries (T1 + T2)
        """
        super().__init__(max_size)

        self._t1: OrderedDict[str, bool] = OrderedDict()
        self._t2: OrderedDict[str, bool] = OrderedDict()
        self._b1: OrderedDict[str, bool] = OrderedDict()
        self._b2: OrderedDict[str, bool] = OrderedDict()

        # Target size for T1
        self._p = 0

        self._lock = threading.RLock()

    def on_access(self, key: str) -> None:
        with self._lock:
            self._stats.accesses += 1

            # Recent hit: promote to frequent list
            if key in self._t1:
                del self._t1[key]
                self._t2[key] = True
                self._stats.promotions += 1
            elif key in self._t2:
                self._t2.move_to_end(key)

    def on_insert(self, key: str) -> None:
        with self._lock:
            if key in self._t1 or key in self._t2:
                self.on_access(key)
                return

            if key in self._b1:
                delta = max(1, len(self._b2) // max(1, len(self._b1)))
                self._p = min(self._p + delta, self.max_size)
                del self._b1[key]
                self._t2[key] = True
            elif key in self._b2:
                delta = max(1, len(self._b1) // max(1, len(self._b2)))
                self._p = max(self._p - delta, 0)
                del self._b2[key]
                self._t2[key] = True
            else:
                self._t1[key] = True

            self._trim_ghosts()
            self._stats.current_size = len(self._t1) + len(self._t2)

    def on_delete(self, key: str) -> None:
        with self._lock:
            for lst in (self._t1, self._t2, self._b1, self._b2):
                lst.pop(key, None)
            self._stats.current_size = len(self._t1) + len(self._t2)

    def on_evict(self, key: str) -> None:
        with self._lock:
            if key in self._t1:
                del self._t1[key]
                self._b1[key] = True
            elif key in self._t2:
                del self._t2[key]
                self._b2[key] = True
            self._trim_ghosts()
            self._stats.current_size = len(self._t1) + len(self._t2)

    def _trim_ghosts(self) -> None:
        # |T1| + |B1| <= c and the whole directory <= 2c
        while self._b1 and len(self._t1) + len(self._b1) > self.max_size:
            self._b1.popitem(last=False)
        while self._b2 and (
            len(self._t1) + len(self._t2) + len(self._b1) + len(self._b2) > 2 * self.max_size
        ):
            self._b2.popitem(last=False)

    def choose_eviction(self) -> Optional[str]:
        """Choose key to evict.

        Returns:
            Key to evict or None
        """
        with self._lock:
            if self._t1 and (len(self._t1) > self._p or not self._t2):
                key = next(iter(self._t1))
            elif self._t2:
                key = next(iter(self._t2))
            else:
                return None

            self._stats.evictions += 1
            return key

    def clear(self) -> None:
        with self._lock:
            self._t1.clear()
            self._t2.clear()
            self._b1.clear()
            self._b2.clear()
            self._p = 0
            self._stats.current_size = 0

    def contains(self, key: str) -> bool:
        """Check if key is resident (T1 or T2)."""
        return key in self._t1 or key in self._t2

    def size(self) -> int:
        return len(self._t1) + len(self._t2)

    def get_stats_detailed(self) -> Dict[str, int]:
        """Get detailed ARC statistics.

        Returns:
            Dict with list sizes and the T1 target
        """
        with self._lock:
            return {
                "t1_size": len(self._t1),
                "t2_size": len(self._t2),
                "b1_size": len(self._b1),
                "b2_size": len(self._b2),
                "p_target": self._p,
            }

    def __repr__(self) -> str:
        return (
            f"ARCPolicy(T1={len(self._t1)}, T2={len(self._t2)}, "
            f"B1={len(self._b1)}, B2={len(self._b2)}, p={self._p})"
        )


__all__ = ["ARCPolicy"]
