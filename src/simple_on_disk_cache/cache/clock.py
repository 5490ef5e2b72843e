# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Wall-clock source shared by the entry store, key index, and memory mirror."""

from __future__ import annotations

import time
from collections.abc import Callable

Clock = Callable[[], int]


def now_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000
