"""RoadStatic Cache - Bounded Pull-Through Loading Cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Type

from roadstatic_core.cache.entry import CacheEntry
from roadstatic_core.errors import ConfigurationError
from roadstatic_core.eviction.arc import ARCPolicy
from roadstatic_core.eviction.lfu import LFUPolicy
from roadstatic_core.eviction.lru import LRUPolicy
from roadstatic_core.eviction.policy import EvictionPolicy

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000
DEFAULT_INITIAL_CAPACITY = 100

Loader = Callable[[str], bytes]

POLICIES: Dict[str, Type[EvictionPolicy]] = {
    "arc": ARCPolicy,
    "lru": LRUPolicy,
    "lfu": LFUPolicy,
}


@dataclass
class CacheConfig:
    """Cache configuration.

    Attributes:
        name: Cache name, used in log messages
        max_entries: Maximum entries; non-positive means the default
        initial_capacity: Expected working-set size; non-positive means the
            default, values above max_entries are clamped
        eviction_policy: "arc", "lru" or "lfu"
        lock_stripes: Number of locks guarding the in-flight load registry
    """

    name: str = "files"
    max_entries: int = DEFAULT_MAX_ENTRIES
    initial_capacity: int = DEFAULT_INITIAL_CAPACITY
    eviction_policy: str = "arc"
    lock_stripes: int = 16


@dataclass
class CacheStats:
    """Cache statistics.

    Attributes:
        hits: Lookups answered from memory
        misses: Lookups that had to wait for a load
        loads: Loads performed against the loader
        load_failures: Loads that raised
        coalesced: Misses that joined a load already in flight
        evictions: Entries removed for capacity
        entry_count: Current entry count
        size_bytes: Current size of cached values
        started_at: When cache was created
    """

    hits: int = 0
    misses: int = 0
    loads: int = 0
    load_failures: int = 0
    coalesced: int = 0
    evictions: int = 0
    entry_count: int = 0
    size_bytes: int = 0
    started_at: Optional[datetime] = None

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def reset(self) -> None:
        """Reset counters. Gauges (entry_count, size_bytes) are kept."""
        self.hits = 0
        self.misses = 0
        self.loads = 0
        self.load_failures = 0
        self.coalesced = 0
        self.evictions = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "loads": self.loads,
            "load_failures": self.load_failures,
            "coalesced": self.coalesced,
            "evictions": self.evictions,
            "entry_count": self.entry_count,
            "size_bytes": self.size_bytes,
            "hit_rate": self.hit_rate,
        }


class _Stripe:
    """One shard of the in-flight load registry."""

    __slots__ = ("lock", "loads")

    def __init__(self):
        self.lock = threading.Lock()
        self.loads: Dict[str, Future] = {}


class LoadingCache:
    """Bounded, thread-safe pull-through cache of byte values.

    ``get(key, loader)`` returns the cached value or calls ``loader(key)`` to
    produce it. Concurrent misses on the same key share one loader call:
    the first caller registers a Future in the in-flight registry and loads
    outside every lock, later callers block on that Future and receive the
    same value or the same exception. Misses on different keys land on
    different registry stripes and never wait on each other's loads.

    Failed loads are not cached; the next lookup loads again.

    The entry map and eviction policy share one lock that is only held for
    O(1) bookkeeping, never across a load.

    Example:
        cache = LoadingCache(CacheConfig(max_entries=500))
        data = cache.get("css/site.css", source.read_file)
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        eviction: Optional[EvictionPolicy] = None,
    ):
        """Initialize cache.

        Args:
            config: Cache configuration
            eviction: Eviction policy; built from config.eviction_policy if None
        """
        self.config = self._normalize(config or CacheConfig())

        if eviction is None:
            policy_cls = POLICIES.get(self.config.eviction_policy.lower())
            if policy_cls is None:
                raise ConfigurationError(
                    f"unknown eviction policy: {self.config.eviction_policy!r}"
                )
            eviction = policy_cls(max_size=self.config.max_entries)
        self._eviction = eviction

        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._stripes: List[_Stripe] = [_Stripe() for _ in range(max(1, self.config.lock_stripes))]
        self._stats = CacheStats(started_at=datetime.now())

        logger.info(
            f"Cache {self.config.name} created "
            f"(max_entries={self.config.max_entries}, policy={type(self._eviction).__name__})"
        )

    @staticmethod
    def _normalize(config: CacheConfig) -> CacheConfig:
        max_entries = config.max_entries
        if max_entries <= 0:
            max_entries = DEFAULT_MAX_ENTRIES

        initial_capacity = config.initial_capacity
        if initial_capacity <= 0:
            initial_capacity = DEFAULT_INITIAL_CAPACITY
        if initial_capacity > max_entries:
            logger.warning(
                f"Cache {config.name}: initial_capacity {initial_capacity} exceeds "
                f"max_entries {max_entries}, clamping"
            )
            initial_capacity = max_entries

        return replace(config, max_entries=max_entries, initial_capacity=initial_capacity)

    def get(self, key: str, loader: Loader) -> bytes:
        """Get value from cache, loading it on a miss.

        Args:
            key: Cache key
            loader: Called with the key when no value is cached

        Returns:
            Cached or freshly loaded value

        Raises:
            Whatever the loader raised, for this caller and every caller
            that joined the same load
        """
        value = self._lookup(key)
        if value is not None:
            return value
        return self._load(key, loader)

    def get_if_present(self, key: str) -> Optional[bytes]:
        """Get value only if already cached.

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        value = self._lookup(key)
        if value is None:
            with self._lock:
                self._stats.misses += 1
        return value

    def _lookup(self, key: str) -> Optional[bytes]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            return self._hit(key, entry)

    def _hit(self, key: str, entry: CacheEntry) -> bytes:
        # Caller holds self._lock
        entry.touch()
        self._eviction.on_access(key)
        self._stats.hits += 1
        return entry.value

    def _stripe_for(self, key: str) -> _Stripe:
        return self._stripes[hash(key) % len(self._stripes)]

    def _load(self, key: str, loader: Loader) -> bytes:
        stripe = self._stripe_for(key)

        with stripe.lock:
            future = stripe.loads.get(key)
            leader = future is None
            if leader:
                # Another leader may have finished between our miss and now
                with self._lock:
                    entry = self._entries.get(key)
                    if entry is not None:
                        return self._hit(key, entry)
                future = Future()
                stripe.loads[key] = future

        with self._lock:
            self._stats.misses += 1
            if leader:
                self._stats.loads += 1
            else:
                self._stats.coalesced += 1

        if not leader:
            logger.debug(f"Cache {self.config.name}: waiting on in-flight load of {key}")
            return future.result()

        logger.debug(f"Cache {self.config.name}: loading {key}")
        try:
            value = loader(key)
        except BaseException as e:
            with self._lock:
                self._stats.load_failures += 1
            future.set_exception(e)
            raise
        else:
            self._insert(key, value)
            future.set_result(value)
            return value
        finally:
            with stripe.lock:
                stripe.loads.pop(key, None)

    def _insert(self, key: str, value: bytes) -> None:
        entry = CacheEntry(key=key, value=value)
        evicted: List[str] = []

        with self._lock:
            previous = self._entries.pop(key, None)
            if previous is not None:
                self._stats.size_bytes -= previous.size_bytes
                self._eviction.on_delete(key)

            while len(self._entries) >= self.config.max_entries:
                victim = self._eviction.choose_eviction()
                if victim is None:
                    break
                self._eviction.on_evict(victim)
                old = self._entries.pop(victim, None)
                if old is not None:
                    self._stats.evictions += 1
                    self._stats.size_bytes -= old.size_bytes
                    evicted.append(victim)

            self._entries[key] = entry
            self._eviction.on_insert(key)
            self._stats.size_bytes += entry.size_bytes
            self._stats.entry_count = len(self._entries)

        for victim in evicted:
            logger.debug(f"Cache {self.config.name}: evicted {victim}")

    def contains(self, key: str) -> bool:
        """Check if key is cached.

        Args:
            key: Cache key

        Returns:
            True if cached
        """
        with self._lock:
            return key in self._entries

    def keys(self) -> List[str]:
        """Get all cached keys.

        Returns:
            List of keys
        """
        with self._lock:
            return list(self._entries.keys())

    def size(self) -> int:
        """Get entry count.

        Returns:
            Number of entries
        """
        return len(self._entries)

    def in_flight(self) -> int:
        """Get number of loads currently running.

        Returns:
            Number of keys being loaded
        """
        count = 0
        for stripe in self._stripes:
            with stripe.lock:
                count += len(stripe.loads)
        return count

    @property
    def eviction(self) -> EvictionPolicy:
        return self._eviction

    def get_stats(self) -> CacheStats:
        """Get cache statistics.

        Returns:
            CacheStats instance
        """
        with self._lock:
            self._stats.entry_count = len(self._entries)
        return self._stats

    def reset_stats(self) -> None:
        """Reset statistics."""
        with self._lock:
            self._stats.reset()

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return f"LoadingCache(name={self.config.name!r}, entries={len(self._entries)})"


__all__ = [
    "LoadingCache",
    "CacheConfig",
    "CacheStats",
    "Loader",
    "DEFAULT_MAX_ENTRIES",
    "DEFAULT_INITIAL_CAPACITY",
]
