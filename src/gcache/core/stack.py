"""Thread-safe LIFO stack of freed slot indices.

The index registry pushes a slot here when the sweeper reclaims it and
pops from here before growing the high-water mark, so the most recently
freed slot is always reused first.
"""

from __future__ import annotations

import threading
from typing import List

from gcache.core.errors import StackEmptyError


class FreeIndexStack:
    def __init__(self) -> None:
        self._items: List[int] = []
        self._lock = threading.Lock()

    def push(self, idx: int) -> None:
        with self._lock:
            self._items.append(idx)

    def top(self) -> int:
        with self._lock:
            if not self._items:
                raise StackEmptyError("stack is empty")
            return self._items[-1]

    def pop(self) -> int:
        # Check and remove under one hold so two callers never get the same slot
        with self._lock:
            if not self._items:
                raise StackEmptyError("stack is empty")
            return self._items.pop()

    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def size(self) -> int:
        with self._lock:
            return len(self._items)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, idx: object) -> bool:
        with self._lock:
            return idx in self._items

    def snapshot(self) -> List[int]:
        """Return the stack contents bottom-to-top."""
        with self._lock:
            return list(self._items)
