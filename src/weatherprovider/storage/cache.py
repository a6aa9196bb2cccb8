from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable

from ..domain.models import WeatherSnapshot
from ..notifications import ChangeNotifier

LOGGER = logging.getLogger(__name__)


class WeatherCache:
    """Single-slot store for the latest weather snapshot.

    Writers are serialised by one lock covering snapshot construction and the
    swap. Readers never take that lock; they only wait on the short swap lock
    while the reference is exchanged. The snapshot itself is immutable.
    """

    def __init__(
        self,
        *,
        notifier: ChangeNotifier | None = None,
        change_uris: Iterable[str] = (),
    ) -> None:
        self._write_lock = threading.Lock()
        self._swap_lock = threading.Lock()
        self._snapshot: WeatherSnapshot | None = None
        self._notifier = notifier
        self._change_uris = tuple(change_uris)

    def read(self) -> WeatherSnapshot | None:
        with self._swap_lock:
            return self._snapshot

    def replace(self, snapshot: WeatherSnapshot) -> None:
        self.update(lambda: snapshot)

    def update(self, factory: Callable[[], WeatherSnapshot]) -> WeatherSnapshot:
        """Build a snapshot under the writer lock and install it.

        If ``factory`` raises, the previous snapshot is kept and no change is
        signalled.
        """
        with self._write_lock:
            snapshot = factory()
            if not isinstance(snapshot, WeatherSnapshot):
                raise TypeError("weather cache factory must return a WeatherSnapshot")
            with self._swap_lock:
                self._snapshot = snapshot

        LOGGER.info(
            "Weather cache replaced for '%s' with %d forecast day(s)",
            snapshot.city,
            len(snapshot.forecasts),
        )
        self._notify()
        return snapshot

    def clear(self) -> None:
        with self._write_lock, self._swap_lock:
            self._snapshot = None

    def _notify(self) -> None:
        if self._notifier is None:
            return
        for uri in self._change_uris:
            self._notifier.notify_change(uri)
