"""In-memory TTL cache with incremental expiration.

Entries expire ``ttl`` seconds after their last access. Expiration is lazy:
an expired entry is removed when a read observes it, or when the sweeper
reaches its slot. Every public operation (except ``count`` and the
configuration setters) first runs one sweep step, so a cache under steady
load cleans itself at O(1) cost per call without a janitor thread.

This cache is process-local and safe for concurrent access from threads.
It has no size cap: memory is bounded only by the number of keys that
stay fresh within their TTL.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from gcache.core.entry import Entry, normalize_ttl
from gcache.core.errors import ValidationError
from gcache.core.interfaces import EvictionCallback, ItemFactory
from gcache.core.notifier import EvictionNotifier
from gcache.core.registry import IndexRegistry

logger = logging.getLogger(__name__)

Evicted = List[Tuple[str, Entry]]


def _check_key(key: object) -> str:
    if not isinstance(key, str):
        raise ValidationError("key must be a string")
    return key


class TTLCache:
    def __init__(
        self,
        *,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = normalize_ttl(ttl_seconds)
        self._clock = clock

        # _kv and _registry change together under _lock
        self._kv: Dict[str, Entry] = {}
        self._registry = IndexRegistry()
        self._lock = threading.RLock()

        self._config_lock = threading.Lock()
        self._factory: Optional[ItemFactory] = None
        self._notifier: Optional[EvictionNotifier] = None

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def registry(self) -> IndexRegistry:
        return self._registry

    def add(self, key: str, value: Any) -> Entry:
        _check_key(key)
        evicted: Evicted = []
        with self._lock:
            self._sweep_step(evicted)
            entry = self._insert(key, value)
        self._notify(evicted)
        return entry

    def get(self, key: str) -> Tuple[Optional[Entry], bool]:
        _check_key(key)
        evicted: Evicted = []
        with self._lock:
            self._sweep_step(evicted)
            entry = self._lookup(key, evicted)
        self._notify(evicted)

        if entry is not None:
            return entry, True

        # The factory runs without the cache lock held
        with self._config_lock:
            factory = self._factory
        if factory is None:
            return None, False

        value = factory(key)
        if value is None:
            return None, False
        return self.add(key, value), True

    def get_or_add(self, key: str, value: Any) -> Entry:
        _check_key(key)
        evicted: Evicted = []
        with self._lock:
            self._sweep_step(evicted)
            entry = self._lookup(key, evicted)
            if entry is None:
                entry = self._insert(key, value)
        self._notify(evicted)
        return entry

    def contains(self, key: str) -> bool:
        _check_key(key)
        evicted: Evicted = []
        with self._lock:
            self._sweep_step(evicted)
            entry = self._lookup(key, evicted)
        self._notify(evicted)
        return entry is not None

    def delete(self, key: str) -> None:
        # The slot stays assigned until the sweeper finds it orphaned
        _check_key(key)
        evicted: Evicted = []
        with self._lock:
            self._sweep_step(evicted)
            entry = self._kv.pop(key, None)
            if entry is not None:
                evicted.append((key, entry))
        self._notify(evicted)

    def count(self) -> int:
        with self._lock:
            return len(self._kv)

    def __len__(self) -> int:
        return self.count()

    def set_item_constructor(self, factory: Optional[ItemFactory]) -> None:
        if factory is not None and not callable(factory):
            raise ValidationError("item constructor must be callable")
        with self._config_lock:
            self._factory = factory

    def on_evicted(self, callback: Optional[EvictionCallback]) -> None:
        """Install the eviction callback, replacing and closing any previous one.

        Passing None removes the callback. Notifications already queued for
        the previous callback are still delivered to it.
        """
        notifier = None
        if callback is not None:
            notifier = EvictionNotifier(callback).start()

        with self._config_lock:
            previous, self._notifier = self._notifier, notifier

        if previous is not None:
            previous.close()

    def close(self) -> None:
        with self._config_lock:
            notifier, self._notifier = self._notifier, None
        if notifier is not None:
            notifier.close()

    def __enter__(self) -> "TTLCache":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _insert(self, key: str, value: Any) -> Entry:
        # Slot first: an entry in _kv must always be indexed
        self._registry.try_add_key(key)
        entry = Entry(value, ttl_seconds=self._ttl, clock=self._clock)
        self._kv[key] = entry
        return entry

    def _lookup(self, key: str, evicted: Evicted) -> Optional[Entry]:
        entry = self._kv.get(key)
        if entry is None:
            return None
        if entry.expired():
            del self._kv[key]
            evicted.append((key, entry))
            logger.debug("Expired %r on access", key)
            return None
        entry.touch()
        return entry

    def _sweep_step(self, evicted: Evicted) -> None:
        idx = self._registry.next_it()
        key = self._registry.key_at(idx)
        if key is None:
            return

        entry = self._kv.get(key)
        if entry is None:
            self._registry.delete_key_by_idx(idx)
            return

        if entry.expired():
            del self._kv[key]
            self._registry.delete_key_by_idx(idx)
            evicted.append((key, entry))
            logger.debug("Swept expired %r from slot %d", key, idx)

    def _notify(self, evicted: Evicted) -> None:
        if not evicted:
            return
        with self._config_lock:
            notifier = self._notifier
        if notifier is None:
            return
        for key, entry in evicted:
            notifier.offer(key, entry)
