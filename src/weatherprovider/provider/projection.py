from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from ..contract import DEFAULT_AUTHORITY, LEGACY_AUTHORITY, WeatherColumns
from .uri_matcher import UriType

ColumnSetName = Literal["lineageos", "cyanogenmod"]


@dataclass(frozen=True, slots=True)
class ColumnSet:
    """Columns a provider populates and returns by default.

    ``current`` doubles as the default projection for the current-only
    selector and ``default_forecast`` for the forecast-only one; the combined
    selector uses the concatenation of ``current`` and ``forecast``. Columns
    outside ``current`` and ``forecast`` are never populated, even when
    requested explicitly.
    """

    name: str
    authority: str
    current: tuple[str, ...]
    forecast: tuple[str, ...]
    default_forecast: tuple[str, ...]
    required_current: tuple[str, ...]

    @property
    def current_and_forecast(self) -> tuple[str, ...]:
        return self.current + self.forecast

    @property
    def localized_labels(self) -> bool:
        return (
            WeatherColumns.CURRENT_CONDITION in self.current
            or WeatherColumns.FORECAST_CONDITION in self.forecast
        )

    def populates(self, column: str) -> bool:
        return column in self.current or column in self.forecast


LINEAGEOS_COLUMNS = ColumnSet(
    name="lineageos",
    authority=DEFAULT_AUTHORITY,
    current=(
        WeatherColumns.CURRENT_CITY,
        WeatherColumns.CURRENT_CONDITION,
        WeatherColumns.CURRENT_CONDITION_CODE,
        WeatherColumns.CURRENT_HUMIDITY,
        WeatherColumns.CURRENT_WIND_DIRECTION,
        WeatherColumns.CURRENT_WIND_SPEED,
        WeatherColumns.CURRENT_WIND_SPEED_UNIT,
        WeatherColumns.CURRENT_TEMPERATURE,
        WeatherColumns.CURRENT_TEMPERATURE_UNIT,
        WeatherColumns.TODAYS_HIGH_TEMPERATURE,
        WeatherColumns.TODAYS_LOW_TEMPERATURE,
        WeatherColumns.CURRENT_TIMESTAMP,
    ),
    forecast=(
        WeatherColumns.FORECAST_LOW,
        WeatherColumns.FORECAST_HIGH,
        WeatherColumns.FORECAST_CONDITION,
        WeatherColumns.FORECAST_CONDITION_CODE,
    ),
    default_forecast=(
        WeatherColumns.FORECAST_LOW,
        WeatherColumns.FORECAST_HIGH,
        WeatherColumns.FORECAST_CONDITION_CODE,
    ),
    required_current=(
        WeatherColumns.CURRENT_CITY,
        WeatherColumns.CURRENT_TEMPERATURE,
        WeatherColumns.CURRENT_TEMPERATURE_UNIT,
    ),
)

CYANOGENMOD_COLUMNS = ColumnSet(
    name="cyanogenmod",
    authority=LEGACY_AUTHORITY,
    current=(
        WeatherColumns.CURRENT_CITY_ID,
        WeatherColumns.CURRENT_CITY,
        WeatherColumns.CURRENT_CONDITION_CODE,
        WeatherColumns.CURRENT_HUMIDITY,
        WeatherColumns.CURRENT_WIND_DIRECTION,
        WeatherColumns.CURRENT_WIND_SPEED,
        WeatherColumns.CURRENT_WIND_SPEED_UNIT,
        WeatherColumns.CURRENT_TEMPERATURE,
        WeatherColumns.CURRENT_TEMPERATURE_UNIT,
        WeatherColumns.CURRENT_TIMESTAMP,
    ),
    forecast=(
        WeatherColumns.FORECAST_LOW,
        WeatherColumns.FORECAST_HIGH,
        WeatherColumns.FORECAST_CONDITION_CODE,
    ),
    default_forecast=(
        WeatherColumns.FORECAST_LOW,
        WeatherColumns.FORECAST_HIGH,
        WeatherColumns.FORECAST_CONDITION_CODE,
    ),
    required_current=(
        WeatherColumns.CURRENT_CITY_ID,
        WeatherColumns.CURRENT_CITY,
        WeatherColumns.CURRENT_TEMPERATURE,
        WeatherColumns.CURRENT_TEMPERATURE_UNIT,
    ),
)

COLUMN_SETS: dict[str, ColumnSet] = {
    LINEAGEOS_COLUMNS.name: LINEAGEOS_COLUMNS,
    CYANOGENMOD_COLUMNS.name: CYANOGENMOD_COLUMNS,
}


def get_column_set(name: str) -> ColumnSet:
    try:
        return COLUMN_SETS[name]
    except KeyError as exc:
        raise ValueError(f"Unsupported column set: {name}") from exc


def resolve_projection(
    projection: Sequence[str] | None,
    uri_type: UriType | None,
    column_set: ColumnSet,
) -> tuple[str, ...]:
    if projection is not None:
        return tuple(projection)
    if uri_type == UriType.CURRENT:
        return column_set.current
    if uri_type == UriType.FORECAST:
        return column_set.default_forecast
    # Anything else, matched or not, gets the combined columns.
    return column_set.current_and_forecast
