"""Background delivery of eviction notifications.

Evicted ``(key, entry)`` pairs go into a bounded FIFO queue consumed by a
single worker thread that invokes the user callback. Offering never blocks
the caller: when the queue is full the newest notification is dropped and
counted. Closing the notifier lets the worker drain what is already queued
and then exit.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Optional

from gcache import config
from gcache.core.entry import Entry
from gcache.core.errors import NotifierClosedError, ValidationError
from gcache.core.interfaces import EvictionCallback

logger = logging.getLogger(__name__)

_STOP = object()


class EvictionNotifier:
    def __init__(self, callback: EvictionCallback, *, maxsize: Optional[int] = None) -> None:
        if not callable(callback):
            raise ValidationError("eviction callback must be callable")
        size = config.EVICTION_QUEUE_SIZE if maxsize is None else int(maxsize)
        if size <= 0:
            raise ValidationError("eviction queue size must be positive")

        self._callback = callback
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=size)
        self._closed = False
        self._dropped = 0
        # Serializes offer() against close() so nothing lands behind the stop marker
        self._lock = threading.Lock()
        self._worker = threading.Thread(
            target=self._run,
            name="gcache-eviction-notifier",
            daemon=True,
        )

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    @property
    def dropped(self) -> int:
        with self._lock:
            return self._dropped

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def start(self) -> "EvictionNotifier":
        with self._lock:
            if self._closed:
                raise NotifierClosedError("notifier is closed")
        self._worker.start()
        logger.debug("Eviction notifier started (maxsize=%d)", self._queue.maxsize)
        return self

    def offer(self, key: str, entry: Entry) -> bool:
        """Queue a notification without blocking. Returns False if it was dropped."""
        with self._lock:
            if self._closed:
                return False
            try:
                self._queue.put_nowait((key, entry))
            except queue.Full:
                self._dropped += 1
                dropped = self._dropped
            else:
                return True

        logger.warning(
            "Eviction queue full (maxsize=%d); dropped notification for %r (%d dropped so far)",
            self._queue.maxsize,
            key,
            dropped,
        )
        return False

    def close(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True

        if not self._worker.is_alive():
            return

        if threading.current_thread() is self._worker:
            # Closed from inside the callback: the worker cannot wait for itself
            try:
                self._queue.put_nowait(_STOP)
            except queue.Full:
                logger.warning("Eviction queue full; notifier worker left running")
            return

        wait = config.NOTIFIER_CLOSE_TIMEOUT if timeout is None else timeout
        try:
            self._queue.put(_STOP, timeout=wait)
        except queue.Full:
            logger.warning("Eviction notifier worker is stuck; leaving it behind")
            return
        self._worker.join(wait)
        if self._worker.is_alive():
            logger.warning("Eviction notifier worker did not stop within %.1fs", wait)
        else:
            logger.debug("Eviction notifier stopped")

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            key, entry = item  # type: ignore[misc]
            try:
                self._callback(key, entry)
            except Exception:
                logger.exception("Eviction callback failed for key %r", key)
