# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""TTL cache engine persisted to a directory backend."""

from simple_on_disk_cache.cache.manager import (
    CacheStats,
    OnDiskCache,
    create_cache,
    create_cache_from_settings,
)

__all__ = ["CacheStats", "OnDiskCache", "create_cache", "create_cache_from_settings"]
