"""In-process TTL cache with incremental expiration and eviction callbacks."""

from gcache.core.cache import TTLCache
from gcache.core.entry import Entry
from gcache.core.errors import (
    GCacheError,
    NotifierClosedError,
    StackEmptyError,
    ValidationError,
)
from gcache.core.interfaces import Cache
from gcache.core.notifier import EvictionNotifier
from gcache.core.registry import IndexRegistry
from gcache.core.stack import FreeIndexStack

__all__ = [
    "Cache",
    "Entry",
    "EvictionNotifier",
    "FreeIndexStack",
    "GCacheError",
    "IndexRegistry",
    "NotifierClosedError",
    "StackEmptyError",
    "TTLCache",
    "ValidationError",
]
