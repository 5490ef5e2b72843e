# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract directory backend interface and directory descriptors.

A cache persists to a *directory*, which is either a locally mounted path or
a prefix inside an S3 bucket.  Each descriptor maps to exactly one
:class:`DirectoryBackend` implementation, chosen once when the cache first
needs it.
"""

from __future__ import annotations

import abc
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class MountedDirectory(BaseModel):
    """A directory on a locally mounted filesystem."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["mounted"] = "mounted"
    path: Path


class S3Directory(BaseModel):
    """A key prefix inside an S3 (or S3-compatible) bucket."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["s3"] = "s3"
    bucket: str = Field(min_length=1)
    prefix: str = ""
    region: str | None = None
    endpoint_url: str | None = None


DirectoryToPersistTo = MountedDirectory | S3Directory


class DirectoryBackend(abc.ABC):
    """Abstract base class for directory backends.

    Backends move opaque text blobs by key and know nothing about expiry or
    encoding.  "Not found" is not an error: :meth:`read` returns ``None``.
    Every other failure propagates unchanged.
    """

    @abc.abstractmethod
    async def read(self, key: str) -> str | None:
        """Read the blob stored under *key*.

        Returns:
            The stored text, or ``None`` if nothing is stored under *key*.
        """

    @abc.abstractmethod
    async def write(self, key: str, data: str) -> None:
        """Replace the blob stored under *key* with *data*."""

    @abc.abstractmethod
    def describe(self) -> str:
        """Return a short human-readable location, for logs and the CLI."""
