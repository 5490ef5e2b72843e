# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Storage backends that cache entries are persisted to."""

from simple_on_disk_cache.backends.base import (
    DirectoryBackend,
    DirectoryToPersistTo,
    MountedDirectory,
    S3Directory,
)
from simple_on_disk_cache.backends.factory import create_backend
from simple_on_disk_cache.backends.mounted import MountedDirectoryBackend
from simple_on_disk_cache.backends.s3 import S3DirectoryBackend

__all__ = [
    "DirectoryBackend",
    "DirectoryToPersistTo",
    "MountedDirectory",
    "MountedDirectoryBackend",
    "S3Directory",
    "S3DirectoryBackend",
    "create_backend",
]
