# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Derive safe cache keys from a procedure name, version, and input.

The derived key has the shape ``<name>.<input preview>.<sha256>``:

* the name namespaces keys per procedure,
* the preview keeps keys recognisable when browsing the cache directory,
* the hash covers the full input and the procedure version, so bumping the
  version invalidates every key cached for prior versions.
"""

from __future__ import annotations

import hashlib
import json
import re
from typing import Any

# Object keys top out around 1k characters and file names at 255; the
# preview is kept short so name + preview + hash stays well inside both.
_PREVIEW_MAX_LENGTH = 100

_STRUCTURAL_CHARS = re.compile(r"[{}\[\]:,]")
_NON_KEY_CHARS = re.compile(r"[^0-9a-zA-Z_]")
_REPEATED_UNDERSCORES = re.compile(r"__+")
_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def _serialize(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _sha256(text: str) -> str:
    return hashlib.sha256(text.encode()).hexdigest()


def _preview(value: Any) -> str:
    preview = _STRUCTURAL_CHARS.sub("_", _serialize(value))
    preview = _NON_KEY_CHARS.sub("", preview)
    preview = _REPEATED_UNDERSCORES.sub("_", preview)
    return preview[:_PREVIEW_MAX_LENGTH].strip("_")


def cast_to_safe_on_disk_cache_key(
    procedure_name: str,
    procedure_version: str | None,
    input: Any,
) -> str:
    """Build a valid cache key for one execution of a procedure.

    Args:
        procedure_name: Name of the procedure whose results are cached.
        procedure_version: Version of the procedure logic, or ``None``.
            Changing it yields a different key for the same input.
        input: JSON-serialisable input the procedure was executed with.

    Returns:
        A key matching ``[A-Za-z0-9._-]+``.
    """
    name = _UNSAFE_NAME_CHARS.sub("_", procedure_name) or "_"
    version_hash = _sha256(procedure_version) if procedure_version else None
    digest = _sha256(_serialize([input, version_hash]))
    parts = [name]
    preview = _preview(input)
    if preview:
        parts.append(preview)
    parts.append(digest)
    return ".".join(parts)
