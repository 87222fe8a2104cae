"""RoadStatic Caching Filesystem - Pull-Through Cache in front of a File Source.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import errno
import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional

from roadstatic_core.cache.cache import (
    DEFAULT_INITIAL_CAPACITY,
    DEFAULT_MAX_ENTRIES,
    CacheConfig,
    CacheStats,
    LoadingCache,
)
from roadstatic_core.errors import EntryNotFoundError, MissingFilesystemError
from roadstatic_core.store.backend import FileSource

logger = logging.getLogger(__name__)


class FSLoader:
    """Adapts a file source to the loading cache's loader contract.

    A missing file becomes ``EntryNotFoundError``; every other error is
    raised unchanged so it is neither hidden nor cached.
    """

    def __init__(self, files: FileSource):
        self.files = files

    def load(self, path: str) -> bytes:
        try:
            return self.files.read_file(path)
        except FileNotFoundError as e:
            raise EntryNotFoundError(path) from e

    __call__ = load


@dataclass
class CachingFSConfig:
    """Caching filesystem options.

    Attributes:
        max_entry_count: Maximum cached files; non-positive means 1000
        initial_capacity: Expected working set; non-positive means 100
        eviction_policy: "arc", "lru" or "lfu"
    """

    max_entry_count: int = DEFAULT_MAX_ENTRIES
    initial_capacity: int = DEFAULT_INITIAL_CAPACITY
    eviction_policy: str = "arc"


class CachingFS(FileSource):
    """File source that keeps whole-file reads in a bounded memory cache.

    ``read_file`` goes through the cache: the first read of a path loads it
    from the wrapped source, later reads are served from memory, and
    concurrent first reads of the same path share a single load.
    ``open_stream`` always goes straight to the wrapped source because a
    stream's position and lifetime belong to its caller.

    Cached bytes are never refreshed. A file that changes in the wrapped
    source keeps being served from memory until its entry is evicted.

    Example:
        files = CachingFS(DirectorySource("public"))
        server = AssetServer("/static/", files)
    """

    def __init__(self, files: Optional[FileSource], option: Optional[CachingFSConfig] = None):
        """Initialize caching filesystem.

        Args:
            files: Wrapped source
            option: Cache sizing; defaults when None

        Raises:
            MissingFilesystemError: If files is None
        """
        if files is None:
            raise MissingFilesystemError()
        super().__init__()

        option = option or CachingFSConfig()
        self.fs = FSLoader(files)
        self.cache = LoadingCache(
            CacheConfig(
                name=f"fs:{type(files).__name__}",
                max_entries=option.max_entry_count,
                initial_capacity=option.initial_capacity,
                eviction_policy=option.eviction_policy,
            )
        )
        logger.info(f"Caching filesystem created over {files!r}")

    @classmethod
    def with_defaults(cls, files: Optional[FileSource]) -> "CachingFS":
        """Create a caching filesystem with the default cache sizes.

        Args:
            files: Wrapped source

        Returns:
            CachingFS instance
        """
        return cls(files, CachingFSConfig())

    def open_stream(self, path: str) -> BinaryIO:
        """Open a file on the wrapped source, bypassing the cache.

        Args:
            path: File path

        Returns:
            Stream from the wrapped source
        """
        self._record_open()
        return self.fs.files.open_stream(path)

    def read_file(self, path: str) -> bytes:
        """Read a whole file through the cache.

        Args:
            path: File path

        Returns:
            File contents

        Raises:
            FileNotFoundError: If the wrapped source has no such file
        """
        self._record_read()
        try:
            return self.cache.get(path, self.fs)
        except EntryNotFoundError as e:
            error = FileNotFoundError(errno.ENOENT, f"read {path}: file does not exist", path)
            self._record_error(error)
            raise error from e
        except Exception as e:
            self._record_error(e)
            raise

    def get_cache_stats(self) -> CacheStats:
        """Get statistics of the underlying cache.

        Returns:
            CacheStats instance
        """
        return self.cache.get_stats()

    def __repr__(self) -> str:
        return f"CachingFS(files={self.fs.files!r}, cached={len(self.cache)})"


__all__ = ["CachingFS", "CachingFSConfig", "FSLoader"]
