"""Configuration and environment helpers for the cache.

Provides small helpers to read typed environment variables and exposes
the defaults used across the package (eviction queue capacity and the
time allowed for a notifier worker to drain on close).
"""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


# Eviction notifications
EVICTION_QUEUE_SIZE = _env_int("GCACHE_EVICTION_QUEUE_SIZE", 1000)
NOTIFIER_CLOSE_TIMEOUT = _env_float("GCACHE_NOTIFIER_CLOSE_TIMEOUT", 5.0)
