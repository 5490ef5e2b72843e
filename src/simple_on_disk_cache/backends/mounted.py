# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Locally mounted directory backend.

Each key is one UTF-8 file directly inside the directory.  Blocking file
I/O runs in a worker thread so callers on the event loop are not stalled.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from pathlib import Path

from simple_on_disk_cache.backends.base import DirectoryBackend, MountedDirectory
from simple_on_disk_cache.core.exceptions import InvalidOnDiskCacheKeyError

logger = logging.getLogger("simple_on_disk_cache.backends.mounted")

# Valid key characters, but they name the directory itself or its parent.
_RESERVED_NAMES = frozenset({".", ".."})


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


class MountedDirectoryBackend(DirectoryBackend):
    """Persist blobs as files inside a mounted directory.

    Args:
        directory: The directory descriptor.  The directory itself must
            already exist; a missing directory surfaces as ``OSError`` on
            write, since it usually means a misconfigured mount.
    """

    def __init__(self, directory: MountedDirectory) -> None:
        self._root = Path(directory.path)
        # Records get the mode a plain open() would give them, not mkstemp's 0600.
        self._file_mode = 0o666 & ~_current_umask()

    @property
    def root(self) -> Path:
        return self._root

    def _path_for(self, key: str) -> Path:
        if key in _RESERVED_NAMES:
            raise InvalidOnDiskCacheKeyError(
                key, "'.' and '..' cannot be used as keys in a mounted directory."
            )
        return self._root / key

    # ------------------------------------------------------------------
    # DirectoryBackend interface
    # ------------------------------------------------------------------

    async def read(self, key: str) -> str | None:
        path = self._path_for(key)
        return await asyncio.to_thread(self._read_sync, path)

    async def write(self, key: str, data: str) -> None:
        path = self._path_for(key)
        await asyncio.to_thread(self._write_sync, path, data)

    def describe(self) -> str:
        return str(self._root)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_sync(self, path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _write_sync(self, path: Path, data: str) -> None:
        # Write to a sibling temp file and rename, so readers never observe
        # a half-written record.
        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=".tmp-", text=True)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(data)
            os.chmod(tmp_name, self._file_mode)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d chars", len(data), extra={"location": str(path)})

