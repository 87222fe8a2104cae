"""Store module - Read-only file sources."""

from roadstatic_core.store.backend import (
    FileSource,
    SourceStats,
    valid_path,
)
from roadstatic_core.store.memory import MemorySource, MemoryFile
from roadstatic_core.store.file import DirectorySource
from roadstatic_core.store.redis import RedisSource, RedisSourceConfig

__all__ = [
    "FileSource",
    "SourceStats",
    "valid_path",
    "MemorySource",
    "MemoryFile",
    "DirectorySource",
    "RedisSource",
    "RedisSourceConfig",
]
