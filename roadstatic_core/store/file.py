"""RoadStatic Directory Source - Local Disk File Source.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import errno
import logging
from pathlib import Path
from typing import BinaryIO, Union

from roadstatic_core.store.backend import FileSource, valid_path

logger = logging.getLogger(__name__)


class DirectorySource(FileSource):
    """File source rooted at a local directory.

    Lookups are confined to the root: a path that is absolute, contains
    ``..`` elements or is otherwise invalid fails with ``EINVAL`` before the
    disk is touched. Errors raised by the operating system (missing files,
    permission problems) pass through unchanged.

    Example:
        source = DirectorySource("/srv/www/static")
        data = source.read_file("css/site.css")
    """

    def __init__(self, root: Union[str, Path]):
        """Initialize directory source.

        Args:
            root: Directory that file paths are relative to
        """
        super().__init__()
        self.root = Path(root)
        logger.info(f"Directory source rooted at {self.root}")

    def _resolve(self, op: str, path: str) -> Path:
        if not valid_path(path):
            error = OSError(errno.EINVAL, f"{op} {path}: invalid argument", path)
            self._record_error(error)
            raise error
        return self.root / path

    def open_stream(self, path: str) -> BinaryIO:
        """Open a file for streaming reads.

        Args:
            path: File path relative to the root

        Returns:
            Open binary file, owned by the caller
        """
        self._record_open()
        target = self._resolve("open", path)
        try:
            return open(target, "rb")
        except OSError as e:
            self._record_error(e)
            raise

    def read_file(self, path: str) -> bytes:
        """Read a whole file.

        Args:
            path: File path relative to the root

        Returns:
            File contents
        """
        self._record_read()
        target = self._resolve("read", path)
        try:
            return target.read_bytes()
        except OSError as e:
            self._record_error(e)
            raise

    def __repr__(self) -> str:
        return f"DirectorySource(root={str(self.root)!r})"


__all__ = ["DirectorySource"]
