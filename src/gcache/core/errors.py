from __future__ import annotations


class GCacheError(Exception):
    """Base error for the cache."""


class ValidationError(GCacheError):
    """Raised when user input is invalid."""


class StackEmptyError(GCacheError):
    """Raised when popping or peeking an empty free-slot stack."""


class NotifierClosedError(GCacheError):
    """Raised when starting an eviction notifier that was already closed."""
