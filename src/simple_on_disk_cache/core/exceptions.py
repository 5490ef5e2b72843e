# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for simple_on_disk_cache.

Backend I/O failures (``OSError``, botocore ``ClientError``) and failures of a
pending value handed to ``set`` are not wrapped: they reach the caller as-is.
"""


class OnDiskCacheError(Exception):
    """Base exception for all simple_on_disk_cache errors."""


class InvalidOnDiskCacheKeyError(OnDiskCacheError, ValueError):
    """A cache key contains characters outside ``[A-Za-z0-9._-]``, or names
    something a backend cannot store a record under.
    """

    def __init__(self, key: str, reason: str | None = None) -> None:
        self.key = key
        self.reason = reason or (
            "Only alphanumeric characters and period, dash, and underscore are allowed."
        )
        super().__init__(f"The on-disk cache key requested is invalid: '{key}'. {self.reason}")


class ConfigurationError(OnDiskCacheError):
    """Invalid or missing configuration."""


class CorruptRecordError(OnDiskCacheError):
    """A persisted record could not be decoded."""
