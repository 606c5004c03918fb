"""Cache entry: a value plus its access timestamps and TTL."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

from gcache.core.errors import ValidationError


def normalize_ttl(ttl_seconds: float) -> float:
    if isinstance(ttl_seconds, bool):
        raise ValidationError("ttl_seconds must be a number")
    try:
        ttl = float(ttl_seconds)
    except (TypeError, ValueError):
        raise ValidationError("ttl_seconds must be a number") from None
    if ttl < 0 or ttl != ttl:
        raise ValidationError("ttl_seconds must be non-negative")
    return ttl


class Entry:
    # Timestamps are readings of the owning cache's clock (time.monotonic by default)
    def __init__(
        self,
        value: Any,
        *,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._value = value
        self._clock = clock
        self._ttl = float(ttl_seconds)
        self._created = clock()
        self._last_access = self._created
        self._lock = threading.Lock()

    @property
    def value(self) -> Any:
        return self._value

    @property
    def created(self) -> float:
        return self._created

    @property
    def last_access(self) -> float:
        with self._lock:
            return self._last_access

    @property
    def ttl(self) -> float:
        with self._lock:
            return self._ttl

    def set_ttl(self, ttl_seconds: float) -> "Entry":
        """Override this entry's TTL and return the entry for chaining.

        The new TTL is measured from the last access, so shortening it can
        make an entry expire immediately.
        """
        ttl = normalize_ttl(ttl_seconds)
        with self._lock:
            self._ttl = ttl
        return self

    def expired(self) -> bool:
        now = self._clock()
        with self._lock:
            return (now - self._last_access) > self._ttl

    def touch(self) -> None:
        # last_access never moves backwards, even with a misbehaving clock
        now = self._clock()
        with self._lock:
            if now > self._last_access:
                self._last_access = now

    def __repr__(self) -> str:
        return f"Entry(value={self._value!r}, ttl={self._ttl!r}, last_access={self._last_access!r})"
