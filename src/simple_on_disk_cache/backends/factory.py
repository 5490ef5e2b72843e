# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Select the backend implementation for a directory descriptor."""

from __future__ import annotations

import logging

from simple_on_disk_cache.backends.base import (
    DirectoryBackend,
    DirectoryToPersistTo,
    MountedDirectory,
    S3Directory,
)
from simple_on_disk_cache.core.exceptions import ConfigurationError

logger = logging.getLogger("simple_on_disk_cache.backends.factory")


def create_backend(directory: DirectoryToPersistTo) -> DirectoryBackend:
    """Instantiate the backend matching *directory*'s variant."""
    if isinstance(directory, MountedDirectory):
        from simple_on_disk_cache.backends.mounted import MountedDirectoryBackend

        backend: DirectoryBackend = MountedDirectoryBackend(directory)
    elif isinstance(directory, S3Directory):
        from simple_on_disk_cache.backends.s3 import S3DirectoryBackend

        backend = S3DirectoryBackend(directory)
    else:
        raise ConfigurationError(
            f"Unsupported directory to persist to: {directory!r}. "
            "Expected MountedDirectory or S3Directory."
        )
    logger.info(
        "Persisting cache to %s", backend.describe(), extra={"location": backend.describe()}
    )
    return backend
