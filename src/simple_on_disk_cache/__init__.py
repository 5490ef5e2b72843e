# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""simple_on_disk_cache - TTL key-value cache persisted to disk or S3."""

__version__ = "0.1.0"

from simple_on_disk_cache.backends.base import (
    DirectoryBackend,
    DirectoryToPersistTo,
    MountedDirectory,
    S3Directory,
)
from simple_on_disk_cache.cache.manager import CacheStats, OnDiskCache, create_cache
from simple_on_disk_cache.core.exceptions import (
    ConfigurationError,
    CorruptRecordError,
    InvalidOnDiskCacheKeyError,
    OnDiskCacheError,
)
from simple_on_disk_cache.key import (
    assert_is_valid_on_disk_cache_key,
    cast_to_safe_on_disk_cache_key,
)

__all__ = [
    "CacheStats",
    "ConfigurationError",
    "CorruptRecordError",
    "DirectoryBackend",
    "DirectoryToPersistTo",
    "InvalidOnDiskCacheKeyError",
    "MountedDirectory",
    "OnDiskCache",
    "OnDiskCacheError",
    "S3Directory",
    "__version__",
    "assert_is_valid_on_disk_cache_key",
    "cast_to_safe_on_disk_cache_key",
    "create_cache",
]
