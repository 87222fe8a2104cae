"""RoadStatic Entry - Immutable Cached File Contents.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class EntryMetadata:
    """Bookkeeping for a cache entry.

    Attributes:
        created_at: When the entry was loaded
        accessed_at: Last access time
        access_count: Number of hits served
        size_bytes: Size of the cached value
    """

    created_at: float = field(default_factory=time.time)
    accessed_at: float = field(default_factory=time.time)
    access_count: int = 0
    size_bytes: int = 0

    def touch(self) -> None:
        """Update access time and count."""
        self.accessed_at = time.time()
        self.access_count += 1

    @property
    def age_seconds(self) -> float:
        """Get entry age in seconds."""
        return time.time() - self.created_at

    @property
    def idle_seconds(self) -> float:
        """Get time since last access."""
        return time.time() - self.accessed_at


@dataclass
class CacheEntry:
    """A loaded file held by the cache.

    The value is never replaced once loaded; a changed file is only picked up
    after the entry has been evicted and loaded again.

    Attributes:
        key: File path
        value: File contents
        metadata: Entry metadata
    """

    key: str
    value: bytes
    metadata: EntryMetadata = field(default_factory=EntryMetadata)

    def __post_init__(self):
        if self.metadata.size_bytes == 0:
            self.metadata.size_bytes = len(self.value)

    def touch(self) -> None:
        """Record a hit."""
        self.metadata.touch()

    @property
    def size_bytes(self) -> int:
        return self.metadata.size_bytes

    def __repr__(self) -> str:
        return f"CacheEntry(key={self.key!r}, size={self.metadata.size_bytes})"


__all__ = ["CacheEntry", "EntryMetadata"]
