"""Cache module - Bounded pull-through caching of file contents."""

from roadstatic_core.cache.entry import (
    CacheEntry,
    EntryMetadata,
)
from roadstatic_core.cache.cache import (
    LoadingCache,
    CacheConfig,
    CacheStats,
    Loader,
    DEFAULT_MAX_ENTRIES,
    DEFAULT_INITIAL_CAPACITY,
)

__all__ = [
    "CacheEntry",
    "EntryMetadata",
    "LoadingCache",
    "CacheConfig",
    "CacheStats",
    "Loader",
    "DEFAULT_MAX_ENTRIES",
    "DEFAULT_INITIAL_CAPACITY",
]
