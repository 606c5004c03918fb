"""Slot index for incremental expiration sweeping.

Every cached key gets a small integer slot. The sweeper walks the slots
with a rotating cursor, one slot per cache operation, so expiration costs
O(1) per call without an ordered structure or a background thread.

Freed slots go onto a LIFO stack and are handed out again before the
high-water mark grows, which keeps the swept range compact.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from gcache.core.errors import StackEmptyError
from gcache.core.stack import FreeIndexStack

logger = logging.getLogger(__name__)


class IndexRegistry:
    def __init__(self) -> None:
        self._keys: Dict[int, str] = {}
        self._slots: Dict[str, int] = {}
        self._last_idx = 0
        self._it = 0
        self._free_ids = FreeIndexStack()
        self._lock = threading.Lock()

    @property
    def last_idx(self) -> int:
        with self._lock:
            return self._last_idx

    @property
    def free_ids(self) -> FreeIndexStack:
        return self._free_ids

    @property
    def keys(self) -> Dict[int, str]:
        with self._lock:
            return dict(self._keys)

    def key_at(self, idx: int) -> Optional[str]:
        with self._lock:
            return self._keys.get(idx)

    def slot_of(self, key: str) -> Optional[int]:
        with self._lock:
            return self._slots.get(key)

    def try_add_key(self, key: str) -> int:
        with self._lock:
            # A key keeps the slot it already holds, including an orphaned one
            idx = self._slots.get(key)
            if idx is not None:
                return idx

            try:
                idx = self._free_ids.pop()
            except StackEmptyError:
                idx = self._last_idx
                self._last_idx += 1

            self._keys[idx] = key
            self._slots[key] = idx
            return idx

    def delete_key_by_idx(self, idx: int) -> None:
        with self._lock:
            key = self._keys.pop(idx, None)
            if key is None:
                return
            self._slots.pop(key, None)
            self._free_ids.push(idx)
        logger.debug("Reclaimed slot %d (key %r)", idx, key)

    def next_it(self) -> int:
        with self._lock:
            if self._last_idx == 0:
                return 0
            it = self._it
            self._it = (self._it + 1) % self._last_idx
            return it

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)
