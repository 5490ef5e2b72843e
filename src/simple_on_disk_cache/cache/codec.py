# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Encode and decode persisted cache records.

A record is a small JSON document::

    {
      "expires_at_ms": 1767225600000,
      "deserialized_for_observability": true,
      "serialization": "compact",
      "value": {"name": "atlantis"}
    }

When the cached string is itself JSON, the parsed structure is stored instead
of the escaped string so the file is readable when inspected by hand.  The
flag records that the value must be re-serialised on the way out, and
``serialization`` records how: ``compact`` (no spaces, non-ASCII kept, as
``JSON.stringify`` writes it) or ``spaced`` (``json.dumps`` defaults).  Only
strings that re-serialise to exactly themselves in one of those styles are
stored this way, and non-finite numbers never are, so
``decode(encode(s)).resolved_value() == s`` for every string.

``expires_at_ms`` is ``None`` for entries that never expire and ``0`` for
tombstones.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ValidationError

from simple_on_disk_cache.core.exceptions import CorruptRecordError


class StoredEntry(BaseModel):
    """A decoded cache record."""

    expires_at_ms: int | None
    deserialized_for_observability: bool = False
    serialization: Literal["compact", "spaced"] | None = None
    value: Any = None

    def is_expired(self, now_ms: int) -> bool:
        return self.expires_at_ms is not None and self.expires_at_ms < now_ms

    def is_tombstone(self) -> bool:
        return self.value is None and not self.deserialized_for_observability

    def resolved_value(self) -> str | None:
        """Return the string exactly as it was handed to ``set``."""
        if self.deserialized_for_observability:
            try:
                return _stringify(self.value, self.serialization or "compact")
            except ValueError as exc:
                raise CorruptRecordError(f"Unserialisable stored value: {exc}") from exc
        if self.value is None:
            return None
        if not isinstance(self.value, str):
            raise CorruptRecordError(
                f"Expected a string value, found {type(self.value).__name__}"
            )
        return self.value


_STYLES: dict[str, dict[str, Any]] = {
    "compact": {"separators": (",", ":"), "ensure_ascii": False},
    "spaced": {},
}


def _stringify(value: Any, style: str) -> str:
    return json.dumps(value, allow_nan=False, **_STYLES[style])


def _most_observable(value: str) -> tuple[Any, str | None]:
    try:
        parsed = json.loads(value)
    except ValueError:
        return value, None
    for style in _STYLES:
        try:
            if _stringify(parsed, style) == value:
                return parsed, style
        except ValueError:
            # NaN and Infinity have no JSON spelling.
            return value, None
    return value, None


def encode(value: str | None, expires_at_ms: int | None) -> str:
    """Serialise *value* and its expiry into a record."""
    if value is None:
        stored, style = None, None
    else:
        stored, style = _most_observable(value)
    return json.dumps(
        {
            "expires_at_ms": expires_at_ms,
            "deserialized_for_observability": style is not None,
            "serialization": style,
            "value": stored,
        },
        indent=2,
        allow_nan=False,
    )


def decode(raw: str) -> StoredEntry:
    """Parse a record produced by :func:`encode`.

    Raises:
        CorruptRecordError: If *raw* is not a well-formed record.
    """
    try:
        return StoredEntry.model_validate_json(raw)
    except ValidationError as exc:
        raise CorruptRecordError(f"Malformed cache record: {exc.error_count()} error(s)") from exc
