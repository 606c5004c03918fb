"""Core protocol definitions.

Defines the Cache protocol: the public contract of a TTL cache, so callers
can depend on the operations rather than on TTLCache itself.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Tuple

from gcache.core.entry import Entry

ItemFactory = Callable[[str], Optional[Any]]
EvictionCallback = Callable[[str, Entry], None]


class Cache(Protocol):
    """Contract for a key-addressed cache with per-entry TTL."""

    def add(self, key: str, value: Any) -> Entry:
        ...

    def get(self, key: str) -> Tuple[Optional[Entry], bool]:
        ...

    def get_or_add(self, key: str, value: Any) -> Entry:
        ...

    def contains(self, key: str) -> bool:
        ...

    def delete(self, key: str) -> None:
        ...

    def count(self) -> int:
        ...

    def set_item_constructor(self, factory: Optional[ItemFactory]) -> None:
        ...

    def on_evicted(self, callback: Optional[EvictionCallback]) -> None:
        ...
