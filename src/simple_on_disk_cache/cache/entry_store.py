# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Read and write single cache entries against a directory backend."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable
from datetime import timedelta

from pydantic import BaseModel

from simple_on_disk_cache.backends.base import DirectoryBackend
from simple_on_disk_cache.cache import codec
from simple_on_disk_cache.cache.clock import Clock, now_ms
from simple_on_disk_cache.core.exceptions import CorruptRecordError
from simple_on_disk_cache.key.validation import assert_is_valid_on_disk_cache_key

logger = logging.getLogger("simple_on_disk_cache.cache.entry_store")

CacheValue = str | Awaitable[str] | None


class KeyIndexEntry(BaseModel):
    """One tracked key and the moment it stops being valid."""

    key: str
    expires_at_ms: int | None

    def is_expired(self, now: int) -> bool:
        return self.expires_at_ms is not None and self.expires_at_ms < now


class WriteResult(BaseModel):
    """What :meth:`EntryStore.set` persisted."""

    entry: KeyIndexEntry
    value: str | None


def discard_pending(value: CacheValue) -> None:
    """Close *value* if it is a coroutine that will never be awaited."""
    if inspect.iscoroutine(value):
        value.close()


class EntryStore:
    """Get and set individual entries.

    Exactly one backend write per :meth:`set` and one backend read per
    :meth:`get`.  Keys are validated before any I/O.

    Args:
        backend: Where records are persisted.
        clock: Source of the current time in epoch milliseconds.
    """

    def __init__(self, backend: DirectoryBackend, clock: Clock = now_ms) -> None:
        self._backend = backend
        self._clock = clock

    @property
    def backend(self) -> DirectoryBackend:
        return self._backend

    def now(self) -> int:
        return self._clock()

    async def get(self, key: str, *, internal: bool = False) -> str | None:
        """Return the unexpired value stored under *key*, or ``None``.

        Corrupt records are logged and reported as a miss.
        """
        if not internal:
            assert_is_valid_on_disk_cache_key(key)
        raw = await self._backend.read(key)
        if raw is None:
            return None
        try:
            entry = codec.decode(raw)
            if entry.is_expired(self.now()):
                return None
            return entry.resolved_value()
        except CorruptRecordError as exc:
            logger.warning(
                "Ignoring corrupt cache record for key %s: %s", key, exc, extra={"cache_key": key}
            )
            return None

    async def set(
        self,
        key: str,
        value: CacheValue,
        ttl: timedelta | None,
        *,
        internal: bool = False,
    ) -> WriteResult:
        """Persist *value* under *key*.

        Args:
            key: Cache key.
            value: The string to cache, an awaitable producing it, or
                ``None`` to write a tombstone.
            ttl: Time until the entry expires; ``None`` means never.

        Raises:
            Exception: Whatever an awaitable *value* raised.  Nothing is
                written in that case.
        """
        if not internal:
            try:
                assert_is_valid_on_disk_cache_key(key)
            except Exception:
                discard_pending(value)
                raise
        if inspect.isawaitable(value):
            value = await value
        if value is not None and not isinstance(value, str):
            raise TypeError(f"Cache values must be str, got {type(value).__name__}")

        expires_at_ms = self.expiry_for(value, ttl)
        await self._backend.write(key, codec.encode(value, expires_at_ms))
        logger.debug(
            "Stored key %s",
            key,
            extra={"cache_key": key, "expires_at_ms": expires_at_ms},
        )
        return WriteResult(
            entry=KeyIndexEntry(key=key, expires_at_ms=expires_at_ms),
            value=value,
        )

    def expiry_for(self, value: str | None, ttl: timedelta | None) -> int | None:
        if value is None:
            return 0
        if ttl is None:
            return None
        return self.now() + int(ttl.total_seconds() * 1000)
