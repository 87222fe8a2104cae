"""Filesystem module - Caching filesystem over a file source."""

from roadstatic_core.fs.caching import (
    CachingFS,
    CachingFSConfig,
    FSLoader,
)

__all__ = [
    "CachingFS",
    "CachingFSConfig",
    "FSLoader",
]
