# app/shared/views.py
"""
The "collection X changed" signal.

Writers call ``invalidate(collection)`` after a successful mutation. Anything
that renders or holds a view of that collection subscribes and is told it is
stale; the per-collection version lets a consumer check whether a write
landed since it last looked. Nothing here stores rendered data, so reads in
any worker always go to the store.
"""
import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

MEMOS = "memos"


class ViewInvalidator:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._versions: dict[str, int] = {}
        self._subscribers: dict[str, list[Callable[[str], None]]] = {}

    def version(self, collection: str) -> int:
        with self._lock:
            return self._versions.get(collection, 0)

    def invalidate(self, collection: str) -> None:
        with self._lock:
            self._versions[collection] = self._versions.get(collection, 0) + 1
            callbacks = list(self._subscribers.get(collection, ()))
        logger.debug("views invalidated: %s", collection)
        for cb in callbacks:
            cb(collection)

    def subscribe(self, collection: str, callback: Callable[[str], None]) -> None:
        with self._lock:
            self._subscribers.setdefault(collection, []).append(callback)

    def unsubscribe(self, collection: str, callback: Callable[[str], None]) -> None:
        with self._lock:
            subs = self._subscribers.get(collection, [])
            if callback in subs:
                subs.remove(callback)


views = ViewInvalidator()
