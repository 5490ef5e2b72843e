# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""The index of currently valid cache keys.

The index is stored as an ordinary, never-expiring record under the
reserved key :data:`KEY_INDEX_KEY`.  Its name starts with ``@``, which key
validation rejects, so no user key can collide with it.

Updates are read-modify-write of the whole list.  Within one process they
run one at a time, in arrival order, behind an ``asyncio.Lock``.  Across
processes nothing is coordinated: two processes updating at once can each
read the same base list, and the later write drops the other's key.  That
key's record is still on the backend, it is just unlisted, so ``get``
reports a miss until the key is set again.  A miss is always a safe answer
for a cache, so the race is accepted rather than guarded by a distributed
lock.
"""

from __future__ import annotations

import asyncio
import json
import logging

from pydantic import TypeAdapter, ValidationError

from simple_on_disk_cache.cache.entry_store import EntryStore, KeyIndexEntry

logger = logging.getLogger("simple_on_disk_cache.cache.key_index")

KEY_INDEX_KEY = "@valid-keys"

_ENTRIES = TypeAdapter(list[KeyIndexEntry])


class KeyIndex:
    """Authoritative list of non-expired keys for one cache.

    Args:
        store: Entry store the index record is read from and written to.
    """

    def __init__(self, store: EntryStore) -> None:
        self._store = store
        self._update_lock = asyncio.Lock()

    async def list(self) -> list[KeyIndexEntry]:
        """Return every indexed entry that has not expired yet."""
        raw = await self._store.get(KEY_INDEX_KEY, internal=True)
        if raw is None:
            return []
        try:
            entries = _ENTRIES.validate_json(raw)
        except ValidationError as exc:
            logger.warning("Ignoring corrupt key index: %s", exc.error_count())
            return []
        now = self._store.now()
        return [entry for entry in entries if not entry.is_expired(now)]

    async def update(self, new_entry: KeyIndexEntry) -> list[KeyIndexEntry]:
        """Record *new_entry*, replacing any earlier entry for the same key.

        An expired or tombstoned *new_entry* removes the key instead.

        Returns:
            The list that was written.
        """
        async with self._update_lock:
            current = await self.list()
            updated = [entry for entry in current if entry.key != new_entry.key]
            if not new_entry.is_expired(self._store.now()):
                updated.append(new_entry)
            serialized = json.dumps([entry.model_dump() for entry in updated])
            await self._store.set(KEY_INDEX_KEY, serialized, ttl=None, internal=True)
            logger.debug(
                "Key index updated for %s: %d valid key(s)", new_entry.key, len(updated)
            )
            return updated
