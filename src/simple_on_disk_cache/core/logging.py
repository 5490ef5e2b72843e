# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Structured logging for cache operations.

Log calls attach cache context through ``extra``::

    logger.debug("Cache HIT", extra={"cache_key": key, "outcome": "memory_hit"})

The JSON formatter lifts those attributes into top-level fields so a log
pipeline can filter by key or outcome without parsing messages.  AWS
credentials and presigned-URL signatures are redacted from every message,
since botocore errors and endpoint URLs can carry them.
"""

import json
import logging
import re
import sys
from typing import Any

REDACT_PATTERNS = [
    re.compile(r"((?:AKIA|ASIA)[A-Z0-9]{4})[A-Z0-9]{12}"),
    re.compile(r"((?:aws_secret_access_key|AWS_SECRET_ACCESS_KEY)\s*[=:]\s*\S{4})\S*"),
    re.compile(r"((?:X-Amz-Signature|X-Amz-Security-Token)=[0-9A-Za-z%]{8})[^&\s]*"),
]

# Record attributes copied into JSON output when a log call sets them.
CONTEXT_FIELDS = ("cache_key", "outcome", "expires_at_ms", "location")


def redact_sensitive(text: str) -> str:
    for pattern in REDACT_PATTERNS:
        text = pattern.sub(r"\1[REDACTED]", text)
    return text


def cache_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the cache context fields set on *record*."""
    return {
        field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)
    }


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sensitive(record.getMessage()),
        }
        for field, value in cache_context(record).items():
            log_entry[field] = redact_sensitive(value) if isinstance(value, str) else value
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = redact_sensitive(str(record.exc_info[1]))
        return json.dumps(log_entry)


class TextFormatter(logging.Formatter):
    """Plain formatter; cache context is appended as ``field=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        context = cache_context(record)
        if context:
            msg += " " + " ".join(f"{field}={value}" for field, value in context.items())
        return redact_sensitive(msg)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger("simple_on_disk_cache")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            TextFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    root.addHandler(handler)
