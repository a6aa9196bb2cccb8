"""Tests for the single-slot weather cache."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from weatherprovider.contract import TemperatureUnit, change_uris
from weatherprovider.domain.models import DayForecast, WeatherSnapshot
from weatherprovider.notifications import ChangeNotifier
from weatherprovider.storage import WeatherCache

AUTHORITY = "lineageos.weather"


def _snapshot(city: str = "Springfield", days: int = 0) -> WeatherSnapshot:
    return WeatherSnapshot(
        city=city,
        temperature=20.0,
        temperature_unit=TemperatureUnit.CELSIUS,
        timestamp=1,
        forecasts=tuple(DayForecast(condition_code=index) for index in range(days)),
    )


@pytest.fixture
def recorded_changes(notifier: ChangeNotifier) -> list[str]:
    seen: list[str] = []
    notifier.register(
        f"content://{AUTHORITY}/weather",
        lambda event: seen.append(event.uri),
        notify_for_descendants=True,
    )
    return seen


@pytest.fixture
def cache(notifier: ChangeNotifier) -> WeatherCache:
    return WeatherCache(notifier=notifier, change_uris=change_uris(AUTHORITY))


class TestWeatherCache:
    def test_empty_until_replaced(self, cache: WeatherCache):
        assert cache.read() is None

    def test_replace_then_read(self, cache: WeatherCache):
        snapshot = _snapshot(days=2)
        cache.replace(snapshot)
        assert cache.read() is snapshot

    def test_replace_discards_previous(self, cache: WeatherCache):
        cache.replace(_snapshot("Springfield"))
        cache.replace(_snapshot("Shelbyville"))
        assert cache.read().city == "Shelbyville"

    def test_replace_signals_three_channels(self, cache: WeatherCache, recorded_changes: list[str]):
        cache.replace(_snapshot())
        assert recorded_changes == list(change_uris(AUTHORITY))

    def test_failed_update_keeps_previous(self, cache: WeatherCache, recorded_changes: list[str]):
        original = _snapshot()
        cache.replace(original)
        recorded_changes.clear()

        def _explode() -> WeatherSnapshot:
            raise ValueError("bad batch")

        with pytest.raises(ValueError):
            cache.update(_explode)
        assert cache.read() is original
        assert recorded_changes == []

    def test_update_rejects_non_snapshot(self, cache: WeatherCache):
        with pytest.raises(TypeError):
            cache.update(lambda: {"city": "Springfield"})
        assert cache.read() is None

    def test_clear_does_not_notify(self, cache: WeatherCache, recorded_changes: list[str]):
        cache.replace(_snapshot())
        recorded_changes.clear()
        cache.clear()
        assert cache.read() is None
        assert recorded_changes == []

    def test_without_notifier(self):
        cache = WeatherCache()
        cache.replace(_snapshot())
        assert cache.read() is not None

    def test_concurrent_writers_never_mix_batches(self, cache: WeatherCache):
        def _write(index: int) -> None:
            cache.update(lambda: _snapshot(city=f"City {index}", days=index % 5))

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(_write, range(50)))

        final = cache.read()
        index = int(final.city.split()[-1])
        assert len(final.forecasts) == index % 5

    def test_read_does_not_wait_for_slow_writer(self, cache: WeatherCache):
        original = _snapshot("Springfield")
        cache.replace(original)
        started = threading.Event()
        release = threading.Event()

        def _slow_factory() -> WeatherSnapshot:
            started.set()
            release.wait(timeout=5)
            return _snapshot("Shelbyville")

        writer = threading.Thread(target=cache.update, args=(_slow_factory,))
        writer.start()
        try:
            assert started.wait(timeout=5)
            begin = time.monotonic()
            seen = cache.read()
            elapsed = time.monotonic() - begin
        finally:
            release.set()
            writer.join(timeout=5)

        assert seen is original
        assert elapsed < 0.5
        assert cache.read().city == "Shelbyville"
