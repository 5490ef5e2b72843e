# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""In-process mirror of recently read or written cache entries.

Entries here are advisory.  A hit means the value was valid when it was
written or last read from the backend; a miss says nothing at all and the
caller falls through to the key index and the entry store.
"""

from __future__ import annotations

from simple_on_disk_cache.cache.clock import Clock, now_ms


class _Entry:
    """A mirrored value with an optional expiry timestamp."""

    __slots__ = ("expires_at_ms", "value")

    def __init__(self, value: str, expires_at_ms: int | None) -> None:
        self.value = value
        self.expires_at_ms = expires_at_ms

    def is_expired(self, now: int) -> bool:
        return self.expires_at_ms is not None and self.expires_at_ms < now


class MemoryCache:
    """Dict-backed TTL mirror owned by a single :class:`OnDiskCache`.

    Expiry uses the same absolute ``expires_at_ms`` as the persisted record,
    so the mirror never outlives the entry it reflects.
    """

    def __init__(self, clock: Clock = now_ms) -> None:
        self._store: dict[str, _Entry] = {}
        self._clock = clock

    def get(self, key: str) -> str | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._store[key]
            return None
        return entry.value

    def set(self, key: str, value: str | None, expires_at_ms: int | None) -> None:
        """Mirror *value*; ``None`` or an already-expired entry drops the key."""
        if value is None or (expires_at_ms is not None and expires_at_ms < self._clock()):
            self._store.pop(key, None)
            return
        self._store[key] = _Entry(value=value, expires_at_ms=expires_at_ms)

