from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Sequence

from ..contract import (
    CONTENT_SCHEME,
    CURRENT_AND_FORECAST_PATH,
    CURRENT_PATH,
    FORECAST_PATH,
    WeatherColumns,
    change_uris,
)
from ..domain.models import DayForecast, WeatherSnapshot
from ..labels import ConditionLabelResolver
from ..notifications import ChangeNotifier
from ..storage.cache import WeatherCache
from .base import InvalidUriError
from .cursor import MatrixCursor
from .projection import LINEAGEOS_COLUMNS, ColumnSet, resolve_projection
from .records import Record, snapshot_from_records
from .uri_matcher import UriMatcher, UriType

LOGGER = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _enum_value(value: Any) -> Any:
    return int(value) if value is not None else None


def build_uri_matcher(authority: str) -> UriMatcher:
    matcher = UriMatcher()
    matcher.add_uri(authority, CURRENT_AND_FORECAST_PATH, UriType.CURRENT_AND_FORECAST)
    matcher.add_uri(authority, CURRENT_PATH, UriType.CURRENT)
    matcher.add_uri(authority, FORECAST_PATH, UriType.FORECAST)
    return matcher


class WeatherContentProvider:
    """Serves the cached weather snapshot through projection-based queries.

    Writes go through :meth:`bulk_insert` only; single inserts, updates and
    deletes are accepted and ignored.
    """

    def __init__(
        self,
        *,
        column_set: ColumnSet = LINEAGEOS_COLUMNS,
        authority: str | None = None,
        cache: WeatherCache | None = None,
        notifier: ChangeNotifier | None = None,
        label_resolver: ConditionLabelResolver | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._column_set = column_set
        self._authority = authority or column_set.authority
        self._notifier = notifier if notifier is not None else ChangeNotifier()
        self._cache = cache if cache is not None else WeatherCache(
            notifier=self._notifier,
            change_uris=change_uris(self._authority),
        )
        self._label_resolver = label_resolver
        self._clock = clock
        self._matcher = build_uri_matcher(self._authority)

    @property
    def authority(self) -> str:
        return self._authority

    @property
    def column_set(self) -> ColumnSet:
        return self._column_set

    @property
    def cache(self) -> WeatherCache:
        return self._cache

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    def _match(self, uri: str) -> UriType | None:
        text = uri.strip()
        if "://" not in text:
            text = f"{CONTENT_SCHEME}://{self._authority}/{text.lstrip('/')}"
        return self._matcher.match(text)

    def _label(self, condition_code: int) -> str:
        if self._label_resolver is None:
            return ""
        try:
            return self._label_resolver.label_for(condition_code)
        except Exception:
            LOGGER.exception("Condition label lookup failed for code %s", condition_code)
            return ""

    def _timestamp_ms(self) -> int:
        return int(self._clock().timestamp() * 1000)

    def query(
        self,
        uri: str,
        projection: Sequence[str] | None = None,
        selection: str | None = None,
        selection_args: Sequence[str] | None = None,
        sort_order: str | None = None,
    ) -> MatrixCursor | None:
        """Render the cached snapshot for ``uri``.

        Returns ``None`` when nothing has been cached yet, which callers use to
        tell "never fetched" apart from an empty forecast. Selection and sort
        arguments are accepted for interface parity and ignored.
        """
        uri_type = self._match(uri)
        if uri_type is None:
            raise InvalidUriError(f"Invalid URI: {uri}")

        snapshot = self._cache.read()
        if snapshot is None:
            return None

        result = MatrixCursor(resolve_projection(projection, uri_type, self._column_set))
        if uri_type != UriType.FORECAST:
            self._add_current_row(result, snapshot)
        if uri_type != UriType.CURRENT:
            for day in snapshot.forecasts:
                self._add_forecast_row(result, day)
        return result

    def _add_current_row(self, result: MatrixCursor, snapshot: WeatherSnapshot) -> None:
        values: dict[str, Any] = {
            WeatherColumns.CURRENT_CITY_ID: snapshot.city_id,
            WeatherColumns.CURRENT_CITY: snapshot.city,
            WeatherColumns.CURRENT_CONDITION_CODE: snapshot.condition_code,
            WeatherColumns.CURRENT_HUMIDITY: snapshot.humidity,
            WeatherColumns.CURRENT_WIND_DIRECTION: snapshot.wind_direction,
            WeatherColumns.CURRENT_WIND_SPEED: snapshot.wind_speed,
            WeatherColumns.CURRENT_WIND_SPEED_UNIT: _enum_value(snapshot.wind_speed_unit),
            WeatherColumns.CURRENT_TEMPERATURE: snapshot.temperature,
            WeatherColumns.CURRENT_TEMPERATURE_UNIT: _enum_value(snapshot.temperature_unit),
            WeatherColumns.TODAYS_HIGH_TEMPERATURE: snapshot.todays_high,
            WeatherColumns.TODAYS_LOW_TEMPERATURE: snapshot.todays_low,
            WeatherColumns.CURRENT_TIMESTAMP: snapshot.timestamp,
        }
        if self._wants(result, WeatherColumns.CURRENT_CONDITION):
            values[WeatherColumns.CURRENT_CONDITION] = self._label(snapshot.condition_code)
        self._add_row(result, values, self._column_set.current)

    def _add_forecast_row(self, result: MatrixCursor, day: DayForecast) -> None:
        values: dict[str, Any] = {
            WeatherColumns.FORECAST_LOW: day.low,
            WeatherColumns.FORECAST_HIGH: day.high,
            WeatherColumns.FORECAST_CONDITION_CODE: day.condition_code,
        }
        if self._wants(result, WeatherColumns.FORECAST_CONDITION):
            values[WeatherColumns.FORECAST_CONDITION] = self._label(day.condition_code)
        self._add_row(result, values, self._column_set.forecast)

    def _wants(self, result: MatrixCursor, column: str) -> bool:
        return column in result.columns and self._column_set.populates(column)

    @staticmethod
    def _add_row(result: MatrixCursor, values: Mapping[str, Any], columns: Sequence[str]) -> None:
        row = result.new_row()
        for column in columns:
            row.add(column, values.get(column))

    def bulk_insert(self, uri: str, records: Sequence[Record]) -> int:
        uri_type = self._match(uri)
        if uri_type != UriType.CURRENT_AND_FORECAST:
            raise InvalidUriError(f"Invalid URI: {uri}")

        try:
            snapshot = self._cache.update(
                lambda: snapshot_from_records(
                    records,
                    self._column_set,
                    default_timestamp=self._timestamp_ms,
                )
            )
        except ValueError as exc:
            LOGGER.warning("Rejected weather bulk insert: %s", exc)
            raise
        return len(snapshot.forecasts) + 1

    def insert(self, uri: str, values: Record | None) -> str | None:
        return None

    def delete(
        self,
        uri: str,
        selection: str | None = None,
        selection_args: Sequence[str] | None = None,
    ) -> int:
        return 0

    def update(
        self,
        uri: str,
        values: Record | None,
        selection: str | None = None,
        selection_args: Sequence[str] | None = None,
    ) -> int:
        return 0

    def get_type(self, uri: str) -> str | None:
        return None
