"""RoadStatic Errors - Error Taxonomy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Permission and I/O failures are the builtin ``PermissionError`` and
``OSError`` raised by a source; they are never wrapped so callers can test
them with ``isinstance``. Only the not-found condition gets a cache-level
type, which the caching filesystem turns back into ``FileNotFoundError``.
"""

from __future__ import annotations


class RoadStaticError(Exception):
    """Base class for all roadstatic errors."""


class ConfigurationError(RoadStaticError, ValueError):
    """Invalid configuration detected at construction or check time."""


class EmptyRouteError(ConfigurationError):
    """Assets route is empty."""

    def __init__(self, message: str = "assets route is empty"):
        super().__init__(message)


class MissingFilesystemError(ConfigurationError):
    """Asset filesystem is missing."""

    def __init__(self, message: str = "asset filesystem is missing"):
        super().__init__(message)


class BadCompressedSuffixError(ConfigurationError):
    """Compressed-variant suffix does not start with '.'."""

    def __init__(self, message: str = "brotli suffix does not start with '.'"):
        super().__init__(message)


class AbsoluteFSPrefixError(ConfigurationError):
    """Filesystem prefix is an absolute path."""

    def __init__(self, message: str = "filesystem prefix is an absolute path"):
        super().__init__(message)


class BadFSPrefixError(ConfigurationError):
    """Filesystem prefix does not end with '/'."""

    def __init__(self, message: str = "filesystem prefix does not end with '/'"):
        super().__init__(message)


class EntryNotFoundError(RoadStaticError, LookupError):
    """Cache loader could not find a value for the key."""

    def __init__(self, key: str):
        super().__init__(f"entry not found: {key}")
        self.key = key


__all__ = [
    "RoadStaticError",
    "ConfigurationError",
    "EmptyRouteError",
    "MissingFilesystemError",
    "BadCompressedSuffixError",
    "AbsoluteFSPrefixError",
    "BadFSPrefixError",
    "EntryNotFoundError",
]
