# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache key validation.

Keys become file names and object keys verbatim, so anything outside
``[A-Za-z0-9._-]`` is rejected before any I/O.
"""

from __future__ import annotations

import re

from simple_on_disk_cache.core.exceptions import InvalidOnDiskCacheKeyError

VALID_KEY_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


def is_valid_on_disk_cache_key(key: object) -> bool:
    return isinstance(key, str) and VALID_KEY_PATTERN.fullmatch(key) is not None


def assert_is_valid_on_disk_cache_key(key: str) -> None:
    """Raise :class:`InvalidOnDiskCacheKeyError` unless *key* is safe."""
    if not is_valid_on_disk_cache_key(key):
        raise InvalidOnDiskCacheKeyError(str(key))
