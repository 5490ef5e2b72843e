# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache key validation and derivation."""

from simple_on_disk_cache.key.derive import cast_to_safe_on_disk_cache_key
from simple_on_disk_cache.key.validation import (
    assert_is_valid_on_disk_cache_key,
    is_valid_on_disk_cache_key,
)

__all__ = [
    "assert_is_valid_on_disk_cache_key",
    "cast_to_safe_on_disk_cache_key",
    "is_valid_on_disk_cache_key",
]
