"""RoadStatic - Static Asset Serving with a Pull-Through File Cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Serves static files over HTTP from any read-only file source:
- Bounded in-memory caching of whole-file reads (ARC, LRU or LFU eviction)
- At most one concurrent load per path; misses on other paths never wait
- Pre-compressed (brotli) variant negotiation
- Ordered first-match media-type rules
- Pluggable error translation and response headers

Architecture:
    ┌─────────────────────────────────────────────────────────────────┐
    │                       RoadStatic System                         │
    ├─────────────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐             │
    │  │ AssetServer │  │ MimeType    │  │  Policies   │   SERVER    │
    │  │ resolve/ASGI│  │ first-match │  │ error/header│   LAYER     │
    │  └──────┬──────┘  └─────────────┘  └─────────────┘             │
    │         │                                                       │
    │  ┌──────┴────────────────────────────────────────┐             │
    │  │        CachingFS  ->  LoadingCache            │   CACHE     │
    │  │   ┌─────┐  ┌─────┐  ┌─────┐                  │   LAYER     │
    │  │   │ ARC │  │ LRU │  │ LFU │   eviction       │             │
    │  │   └─────┘  └─────┘  └─────┘                  │             │
    │  └──────────────────────┬────────────────────────┘             │
    │                         │                                       │
    │  ┌──────────────────────┴────────────────────────┐             │
    │  │              File Sources                      │   SOURCE    │
    │  │   ┌────────┐  ┌───────────┐  ┌────────┐      │   LAYER     │
    │  │   │ Memory │  │ Directory │  │ Redis  │      │             │
    │  │   └────────┘  └───────────┘  └────────┘      │             │
    │  └──────────────────────────────────────────────┘             │
    └─────────────────────────────────────────────────────────────────┘

Example Usage:
    from starlette.applications import Starlette
    from roadstatic_core import AssetServer, CachingFS, DirectorySource

    files = CachingFS(DirectorySource("public"))
    server = AssetServer("/static/", files)
    server.brotli_suffix = ".br"
    server.check()

    app = Starlette(routes=[server.as_mount()])
"""

__version__ = "1.0.0"
__author__ = "BlackRoad OS"

from roadstatic_core.errors import (
    RoadStaticError,
    ConfigurationError,
    EmptyRouteError,
    MissingFilesystemError,
    BadCompressedSuffixError,
    AbsoluteFSPrefixError,
    BadFSPrefixError,
    EntryNotFoundError,
)
from roadstatic_core.store.backend import FileSource, SourceStats
from roadstatic_core.store.memory import MemorySource, MemoryFile
from roadstatic_core.store.file import DirectorySource
from roadstatic_core.store.redis import RedisSource, RedisSourceConfig
from roadstatic_core.eviction.policy import EvictionPolicy, EvictionStats
from roadstatic_core.eviction.lru import LRUPolicy
from roadstatic_core.eviction.lfu import LFUPolicy
from roadstatic_core.eviction.arc import ARCPolicy
from roadstatic_core.cache.cache import (
    LoadingCache,
    CacheConfig,
    CacheStats,
    DEFAULT_MAX_ENTRIES,
    DEFAULT_INITIAL_CAPACITY,
)
from roadstatic_core.fs.caching import CachingFS, CachingFSConfig, FSLoader
from roadstatic_core.server.mime import MimeTypeTable, MimeTyper
from roadstatic_core.server.policies import (
    ErrorTranslator,
    DefaultErrorTranslator,
    HeaderPolicy,
    CacheControlHeaders,
)
from roadstatic_core.server.asset_server import AssetServer

__all__ = [
    # Errors
    "RoadStaticError",
    "ConfigurationError",
    "EmptyRouteError",
    "MissingFilesystemError",
    "BadCompressedSuffixError",
    "AbsoluteFSPrefixError",
    "BadFSPrefixError",
    "EntryNotFoundError",
    # Sources
    "FileSource",
    "SourceStats",
    "MemorySource",
    "MemoryFile",
    "DirectorySource",
    "RedisSource",
    "RedisSourceConfig",
    # Eviction
    "EvictionPolicy",
    "EvictionStats",
    "LRUPolicy",
    "LFUPolicy",
    "ARCPolicy",
    # Cache
    "LoadingCache",
    "CacheConfig",
    "CacheStats",
    "DEFAULT_MAX_ENTRIES",
    "DEFAULT_INITIAL_CAPACITY",
    "CachingFS",
    "CachingFSConfig",
    "FSLoader",
    # Server
    "MimeTypeTable",
    "MimeTyper",
    "ErrorTranslator",
    "DefaultErrorTranslator",
    "HeaderPolicy",
    "CacheControlHeaders",
    "AssetServer",
]
