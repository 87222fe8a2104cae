"""RoadStatic File Source - Abstract Read-Only File Interface.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)


def valid_path(path: str) -> bool:
    """Check whether a path is usable as a source lookup key.

    Valid paths are unrooted, slash-separated sequences of elements. No
    element may be empty, "." or "..", and backslashes are not separators.

    Args:
        path: Candidate path

    Returns:
        True if valid
    """
    if not path or path.startswith("/") or path.endswith("/"):
        return False
    if "\\" in path:
        return False
    for element in path.split("/"):
        if element in ("", ".", ".."):
            return False
    return True


@dataclass
class SourceStats:
    """File source statistics.

    Attributes:
        reads: Number of whole-file reads
        opens: Number of stream opens
        errors: Number of failed operations
        last_error: Message of the most recent failure
        last_error_at: When the most recent failure happened
    """

    reads: int = 0
    opens: int = 0
    errors: int = 0
    last_error: Optional[str] = None
    last_error_at: Optional[datetime] = None

    def record_error(self, error: str) -> None:
        """Record an error."""
        self.errors += 1
        self.last_error = error
        self.last_error_at = datetime.now()


class FileSource(ABC):
    """Abstract read-only file source.

    A source is the backing store that cached filesystems and asset servers
    read from. Implementations must raise ``FileNotFoundError`` for absent
    files and ``PermissionError`` for unreadable ones; any other failure is
    raised as-is.

    Implementations:
    - MemorySource: In-process mapping of paths to bytes
    - DirectorySource: Files beneath a local directory
    - RedisSource: File bytes stored in Redis
    """

    def __init__(self):
        """Initialize source."""
        self._stats = SourceStats()
        self._stats_lock = threading.Lock()

    @abstractmethod
    def open_stream(self, path: str) -> BinaryIO:
        """Open a file for streaming reads.

        Args:
            path: File path

        Returns:
            Readable binary stream, owned by the caller
        """
        pass

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """Read a whole file.

        Args:
            path: File path

        Returns:
            File contents
        """
        pass

    def _record_read(self) -> None:
        with self._stats_lock:
            self._stats.reads += 1

    def _record_open(self) -> None:
        with self._stats_lock:
            self._stats.opens += 1

    def _record_error(self, error: BaseException) -> None:
        with self._stats_lock:
            self._stats.record_error(str(error))

    def get_stats(self) -> SourceStats:
        """Get source statistics.

        Returns:
            SourceStats instance
        """
        return self._stats

    def reset_stats(self) -> None:
        """Reset statistics."""
        with self._stats_lock:
            self._stats = SourceStats()


__all__ = ["FileSource", "SourceStats", "valid_path"]
