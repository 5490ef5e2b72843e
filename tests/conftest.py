# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

import asyncio
import logging

import pytest

from simple_on_disk_cache.backends.base import DirectoryBackend
from simple_on_disk_cache.cache.manager import OnDiskCache

# 2026-01-01T00:00:00Z
START_MS = 1_767_225_600_000


class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, start_ms: int = START_MS) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * 1000)


class RecordingBackend(DirectoryBackend):
    """Dict-backed backend that records every read and write.

    With ``yield_on_read`` set, a read captures the stored blob and then
    yields to the event loop before returning it, which lets concurrent
    read-modify-write cycles interleave the way real I/O would.
    """

    def __init__(self, yield_on_read: bool = False) -> None:
        self.blobs: dict[str, str] = {}
        self.reads: list[str] = []
        self.writes: list[str] = []
        self.yield_on_read = yield_on_read

    async def read(self, key: str) -> str | None:
        self.reads.append(key)
        data = self.blobs.get(key)
        if self.yield_on_read:
            await asyncio.sleep(0)
        return data

    async def write(self, key: str, data: str) -> None:
        self.writes.append(key)
        self.blobs[key] = data

    def describe(self) -> str:
        return "memory://test"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def racy_backend() -> RecordingBackend:
    return RecordingBackend(yield_on_read=True)


@pytest.fixture
def cache(backend: RecordingBackend, clock: FakeClock) -> OnDiskCache:
    return OnDiskCache(directory=backend, clock=clock)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers installed by setup_logging so they don't leak between tests."""
    yield
    logger = logging.getLogger("simple_on_disk_cache")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
