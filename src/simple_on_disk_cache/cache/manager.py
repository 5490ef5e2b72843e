# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache facade that composes the entry store, key index, and memory mirror.

:class:`OnDiskCache` is the primary public interface.  Writes go to the
backend first, then to the key index, then to the in-process mirror, so a
key is never listed before its value is readable.  Reads try the mirror,
then consult the index (which is authoritative for whether a key exists)
before touching the entry itself.

Every :class:`OnDiskCache` owns its own mirror and index lock.  Two caches
pointed at the same directory share nothing in memory.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import timedelta

from simple_on_disk_cache.backends.base import DirectoryBackend, DirectoryToPersistTo
from simple_on_disk_cache.backends.factory import create_backend
from simple_on_disk_cache.cache.clock import Clock, now_ms
from simple_on_disk_cache.cache.entry_store import (
    CacheValue,
    EntryStore,
    KeyIndexEntry,
    discard_pending,
)
from simple_on_disk_cache.cache.key_index import KeyIndex
from simple_on_disk_cache.cache.memory import MemoryCache
from simple_on_disk_cache.core.exceptions import ConfigurationError
from simple_on_disk_cache.key.validation import assert_is_valid_on_disk_cache_key

logger = logging.getLogger("simple_on_disk_cache.cache.manager")

Expiration = timedelta | int | float | None
DirectoryResolver = Callable[[], Awaitable[DirectoryToPersistTo]]
DirectorySource = DirectoryToPersistTo | DirectoryResolver | DirectoryBackend

DEFAULT_EXPIRATION = timedelta(minutes=5)


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


def normalize_expiration(expiration: Expiration) -> timedelta | None:
    """Coerce *expiration* to a positive ``timedelta``, or ``None`` for never."""
    if expiration is None:
        return None
    if isinstance(expiration, bool):
        raise ConfigurationError(f"Invalid expiration: {expiration!r}")
    if isinstance(expiration, int | float):
        expiration = timedelta(seconds=expiration)
    if not isinstance(expiration, timedelta):
        raise ConfigurationError(f"Invalid expiration: {expiration!r}")
    if expiration <= timedelta(0):
        raise ConfigurationError(
            f"Expiration must be positive, got {expiration}. Use None to never expire."
        )
    return expiration


# Lookup outcomes, as counted by CacheStats and logged with each lookup.
MEMORY_HIT = "memory_hit"
BACKEND_HIT = "backend_hit"
MISS_NOT_INDEXED = "miss_not_indexed"
MISS_NO_RECORD = "miss_no_record"


class CacheStats:
    """Lookup counters for one :class:`OnDiskCache`.

    Hits are split by where the value came from, so a low ``memory_hits``
    share shows the instance is mostly reading through to the backend.
    """

    __slots__ = ("backend_hits", "memory_hits", "misses")

    def __init__(self) -> None:
        self.memory_hits: int = 0
        self.backend_hits: int = 0
        self.misses: int = 0

    @property
    def hits(self) -> int:
        return self.memory_hits + self.backend_hits

    @property
    def total(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        return self.hits / self.total if self.total else 0.0

    def record(self, outcome: str) -> None:
        if outcome == MEMORY_HIT:
            self.memory_hits += 1
        elif outcome == BACKEND_HIT:
            self.backend_hits += 1
        else:
            self.misses += 1

    def to_dict(self) -> dict[str, object]:
        return {
            "memory_hits": self.memory_hits,
            "backend_hits": self.backend_hits,
            "hits": self.hits,
            "misses": self.misses,
            "total": self.total,
            "hit_rate": round(self.hit_rate, 4),
        }


class _Components:
    __slots__ = ("index", "store")

    def __init__(self, store: EntryStore, index: KeyIndex) -> None:
        self.store = store
        self.index = index


class OnDiskCache:
    """TTL key-value cache persisted to a mounted directory or S3.

    Args:
        directory: Where to persist entries: a :class:`MountedDirectory`,
            an :class:`S3Directory`, an async callable returning either, or
            an already-built :class:`DirectoryBackend`.  Resolvers are
            awaited once, on first use.
        expiration: Default time-to-live for :meth:`set`.  ``None`` means
            entries never expire.
        clock: Source of the current time in epoch milliseconds.
    """

    def __init__(
        self,
        directory: DirectorySource,
        expiration: Expiration = DEFAULT_EXPIRATION,
        clock: Clock = now_ms,
    ) -> None:
        self._directory = directory
        self._default_expiration = normalize_expiration(expiration)
        self._clock = clock
        self._memory = MemoryCache(clock=clock)
        self._stats = CacheStats()
        self._components: _Components | None = None
        self._init_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Backend resolution
    # ------------------------------------------------------------------

    async def _resolve(self) -> _Components:
        if self._components is not None:
            return self._components
        async with self._init_lock:
            if self._components is None:
                backend = await self._build_backend()
                store = EntryStore(backend, clock=self._clock)
                self._components = _Components(store=store, index=KeyIndex(store))
        return self._components

    async def _build_backend(self) -> DirectoryBackend:
        directory = self._directory
        if isinstance(directory, DirectoryBackend):
            return directory
        if callable(directory):
            directory = await directory()
        return create_backend(directory)

    async def backend(self) -> DirectoryBackend:
        """Return the backend, resolving the directory if needed."""
        return (await self._resolve()).store.backend

    # ------------------------------------------------------------------
    # Cache operations
    # ------------------------------------------------------------------

    async def get(self, key: str) -> str | None:
        """Return the cached value for *key*, or ``None`` on a miss."""
        assert_is_valid_on_disk_cache_key(key)

        mirrored = self._memory.get(key)
        if mirrored is not None:
            self._record(key, MEMORY_HIT)
            return mirrored

        components = await self._resolve()
        indexed = next(
            (entry for entry in await components.index.list() if entry.key == key),
            None,
        )
        if indexed is None:
            self._record(key, MISS_NOT_INDEXED)
            return None

        value = await components.store.get(key)
        if value is None:
            # Listed but unreadable: removed out of band, expired, or corrupt.
            self._record(key, MISS_NO_RECORD)
            return None

        self._memory.set(key, value, indexed.expires_at_ms)
        self._record(key, BACKEND_HIT)
        return value

    def _record(self, key: str, outcome: str) -> None:
        self._stats.record(outcome)
        logger.debug(
            "Cache %s for key %s", outcome, key, extra={"cache_key": key, "outcome": outcome}
        )

    async def set(
        self,
        key: str,
        value: CacheValue,
        expiration: Expiration | _Unset = UNSET,
    ) -> None:
        """Store *value* under *key*.

        Args:
            key: Cache key matching ``[A-Za-z0-9._-]+``.
            value: The string to cache, an awaitable producing it, or
                ``None`` to invalidate the key.
            expiration: Time-to-live for this entry as a ``timedelta`` or
                seconds; ``None`` never expires.  Defaults to the cache's
                default expiration.
        """
        try:
            assert_is_valid_on_disk_cache_key(key)
            ttl = (
                self._default_expiration
                if isinstance(expiration, _Unset)
                else normalize_expiration(expiration)
            )
            components = await self._resolve()
        except Exception:
            discard_pending(value)
            raise

        written = await components.store.set(key, value, ttl)
        await components.index.update(written.entry)
        self._memory.set(key, written.value, written.entry.expires_at_ms)

    async def invalidate(self, key: str) -> None:
        """Remove *key* from the cache."""
        await self.set(key, None)

    async def keys(self) -> list[str]:
        """Return every key that is currently valid."""
        return [entry.key for entry in await self.entries()]

    async def entries(self) -> list[KeyIndexEntry]:
        """Return every currently valid key with its expiry."""
        components = await self._resolve()
        return await components.index.list()

    @property
    def stats(self) -> CacheStats:
        """Return the hit/miss statistics object."""
        return self._stats

    @property
    def default_expiration(self) -> timedelta | None:
        return self._default_expiration


def create_cache(
    directory: DirectorySource,
    expiration: Expiration = DEFAULT_EXPIRATION,
    clock: Clock = now_ms,
) -> OnDiskCache:
    """Create an :class:`OnDiskCache` persisting to *directory*."""
    return OnDiskCache(directory=directory, expiration=expiration, clock=clock)


def create_cache_from_settings() -> OnDiskCache:
    """Instantiate a cache from environment configuration."""
    from simple_on_disk_cache.core.config import get_settings

    settings = get_settings()
    return OnDiskCache(
        directory=settings.directory(),
        expiration=settings.default_expiration_seconds,
    )
