from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable

LOGGER = logging.getLogger(__name__)

ChangeObserver = Callable[["ChangeEvent"], None]


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    uri: str
    sequence: int
    created_at: float = field(default_factory=lambda: time.time())


class ObserverHandle:
    def __init__(self, notifier: ChangeNotifier, key: int) -> None:
        self._notifier = notifier
        self._key = key
        self._closed = False

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._notifier._unregister(self._key)


class ChangeNotifier:
    """Fan-out broadcaster for content change signals.

    Observers register for a URI (optionally including descendant URIs) and
    are called synchronously on the notifying thread. Delivery is
    fire-and-forget: an observer that raises is logged and skipped.
    """

    def __init__(self) -> None:
        self._observers: dict[int, tuple[str, bool, ChangeObserver]] = {}
        self._lock = threading.Lock()
        self._next_key = 0
        self._sequence = 0

    @property
    def change_count(self) -> int:
        return self._sequence

    def register(
        self,
        uri: str,
        observer: ChangeObserver,
        *,
        notify_for_descendants: bool = False,
    ) -> ObserverHandle:
        with self._lock:
            self._next_key += 1
            key = self._next_key
            self._observers[key] = (uri.rstrip("/"), notify_for_descendants, observer)
        return ObserverHandle(self, key)

    def _unregister(self, key: int) -> None:
        with self._lock:
            self._observers.pop(key, None)

    def notify_change(self, uri: str) -> None:
        target = uri.rstrip("/")
        with self._lock:
            self._sequence += 1
            event = ChangeEvent(uri=target, sequence=self._sequence)
            matching = [
                observer
                for registered, descendants, observer in self._observers.values()
                if registered == target
                or (descendants and target.startswith(f"{registered}/"))
            ]

        LOGGER.debug("Change #%d on %s (%d observer(s))", event.sequence, target, len(matching))
        for observer in matching:
            try:
                observer(event)
            except Exception:
                LOGGER.exception("Change observer for %s failed", target)
