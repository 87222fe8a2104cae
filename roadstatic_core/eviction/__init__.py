"""Eviction module - Cache eviction policies."""

from roadstatic_core.eviction.policy import (
    EvictionPolicy,
    EvictionStats,
)
from roadstatic_core.eviction.lru import LRUPolicy
from roadstatic_core.eviction.lfu import LFUPolicy
from roadstatic_core.eviction.arc import ARCPolicy

__all__ = [
    "EvictionPolicy",
    "EvictionStats",
    "LRUPolicy",
    "LFUPolicy",
    "ARCPolicy",
]
