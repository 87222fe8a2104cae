"""RoadStatic Memory Source - In-Memory File Source.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import errno
import io
import logging
import threading
from dataclasses import dataclass
from typing import BinaryIO, Dict, List, Mapping, Optional, Union

from roadstatic_core.store.backend import FileSource, valid_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemoryFile:
    """A file held by a MemorySource.

    Attributes:
        data: File contents
        readable: False makes every read fail with PermissionError
    """

    data: bytes = b""
    readable: bool = True


class MemorySource(FileSource):
    """In-memory file source.

    Serves files from a mapping of path to bytes, the way an embedded asset
    bundle would. Paths follow the same validity rules as every other source,
    and an invalid path is reported as not found.

    Example:
        source = MemorySource({
            "app.js": b"console.log('hi');",
            "secret.txt": MemoryFile(b"...", readable=False),
        })
        data = source.read_file("app.js")
    """

    def __init__(self, files: Optional[Mapping[str, Union[bytes, MemoryFile]]] = None):
        """Initialize memory source.

        Args:
            files: Initial path -> contents mapping
        """
        super().__init__()
        self._files: Dict[str, MemoryFile] = {}
        self._lock = threading.RLock()

        for path, contents in (files or {}).items():
            self.add(path, contents)

    def add(self, path: str, contents: Union[bytes, MemoryFile]) -> None:
        """Add or replace a file.

        Args:
            path: File path
            contents: Bytes or MemoryFile
        """
        if not isinstance(contents, MemoryFile):
            contents = MemoryFile(data=bytes(contents))
        with self._lock:
            self._files[path] = contents

    def remove(self, path: str) -> bool:
        """Remove a file.

        Args:
            path: File path

        Returns:
            True if removed
        """
        with self._lock:
            return self._files.pop(path, None) is not None

    def _lookup(self, op: str, path: str) -> bytes:
        with self._lock:
            file = self._files.get(path) if valid_path(path) else None

        if file is None:
            error: OSError = FileNotFoundError(
                errno.ENOENT, f"{op} {path}: file does not exist", path
            )
        elif not file.readable:
            error = PermissionError(
                errno.EACCES, f"{op} {path}: permission denied", path
            )
        else:
            return file.data

        self._record_error(error)
        raise error

    def open_stream(self, path: str) -> BinaryIO:
        """Open a file as an in-memory stream.

        Args:
            path: File path

        Returns:
            BytesIO positioned at the start of the file
        """
        self._record_open()
        return io.BytesIO(self._lookup("open", path))

    def read_file(self, path: str) -> bytes:
        """Read a whole file.

        Args:
            path: File path

        Returns:
            File contents
        """
        self._record_read()
        return self._lookup("read", path)

    def paths(self) -> List[str]:
        """Get all stored paths.

        Returns:
            List of paths
        """
        with self._lock:
            return list(self._files.keys())

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"MemorySource(files={len(self._files)})"


__all__ = ["MemorySource", "MemoryFile"]
