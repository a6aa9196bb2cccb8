from __future__ import annotations

import math
from typing import Any, Callable, Mapping, Sequence

from pydantic import ValidationError

from ..contract import WeatherColumns
from ..domain.models import DayForecast, WeatherSnapshot
from .base import MalformedBulkInsertError
from .projection import ColumnSet

Record = Mapping[str, Any]

_FLOAT = "float"
_INT = "int"
_TEXT = "text"

CURRENT_FIELDS: dict[str, tuple[str, str]] = {
    WeatherColumns.CURRENT_CITY_ID: ("city_id", _TEXT),
    WeatherColumns.CURRENT_CITY: ("city", _TEXT),
    WeatherColumns.CURRENT_CONDITION_CODE: ("condition_code", _INT),
    WeatherColumns.CURRENT_TEMPERATURE: ("temperature", _FLOAT),
    WeatherColumns.CURRENT_TEMPERATURE_UNIT: ("temperature_unit", _INT),
    WeatherColumns.CURRENT_HUMIDITY: ("humidity", _FLOAT),
    WeatherColumns.CURRENT_WIND_SPEED: ("wind_speed", _FLOAT),
    WeatherColumns.CURRENT_WIND_SPEED_UNIT: ("wind_speed_unit", _INT),
    WeatherColumns.CURRENT_WIND_DIRECTION: ("wind_direction", _FLOAT),
    WeatherColumns.CURRENT_TIMESTAMP: ("timestamp", _INT),
    WeatherColumns.TODAYS_HIGH_TEMPERATURE: ("todays_high", _FLOAT),
    WeatherColumns.TODAYS_LOW_TEMPERATURE: ("todays_low", _FLOAT),
}

FORECAST_FIELDS: dict[str, tuple[str, str]] = {
    WeatherColumns.FORECAST_LOW: ("low", _FLOAT),
    WeatherColumns.FORECAST_HIGH: ("high", _FLOAT),
    WeatherColumns.FORECAST_CONDITION_CODE: ("condition_code", _INT),
}


def _coerce_optional_float(value: Any, *, field_name: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedBulkInsertError(f"Invalid numeric value for {field_name}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedBulkInsertError(f"Invalid numeric value for {field_name}") from exc
    if math.isnan(number):
        return None
    if math.isinf(number):
        raise MalformedBulkInsertError(f"Invalid numeric value for {field_name}")
    return number


def _coerce_optional_int(value: Any, *, field_name: str) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = _coerce_optional_float(value, field_name=field_name)
    if number is None:
        return None
    if not number.is_integer():
        raise MalformedBulkInsertError(f"Invalid integer value for {field_name}")
    return int(number)


def _coerce_optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _coerce(value: Any, kind: str, *, field_name: str) -> Any:
    if kind == _FLOAT:
        return _coerce_optional_float(value, field_name=field_name)
    if kind == _INT:
        return _coerce_optional_int(value, field_name=field_name)
    return _coerce_optional_text(value)


def _extract(
    record: Record,
    fields: Mapping[str, tuple[str, str]],
    columns: Sequence[str],
    *,
    label: str,
) -> dict[str, Any]:
    if not isinstance(record, Mapping):
        raise MalformedBulkInsertError(f"{label} must be a mapping of column to value")

    data: dict[str, Any] = {}
    for column in columns:
        mapping = fields.get(column)
        if mapping is None:
            continue
        field_name, kind = mapping
        value = _coerce(record.get(column), kind, field_name=f"{label}.{column}")
        if value is not None:
            data[field_name] = value
    return data


def parse_forecast_record(record: Record, column_set: ColumnSet, *, index: int) -> DayForecast:
    label = f"records[{index}]"
    data = _extract(record, FORECAST_FIELDS, column_set.forecast, label=label)
    try:
        return DayForecast.model_validate(data)
    except ValidationError as exc:
        raise MalformedBulkInsertError(f"{label} is not a valid forecast day: {exc}") from exc


def parse_current_record(
    record: Record,
    column_set: ColumnSet,
    *,
    forecasts: Sequence[DayForecast],
    default_timestamp: Callable[[], int],
) -> WeatherSnapshot:
    data = _extract(record, CURRENT_FIELDS, column_set.current, label="records[0]")

    for column in column_set.required_current:
        field_name, _ = CURRENT_FIELDS[column]
        if data.get(field_name) is None:
            raise MalformedBulkInsertError(f"Current weather record is missing '{column}'")

    data.setdefault("timestamp", default_timestamp())
    data["forecasts"] = tuple(forecasts)
    try:
        return WeatherSnapshot.model_validate(data)
    except ValidationError as exc:
        raise MalformedBulkInsertError(f"records[0] is not a valid current weather record: {exc}") from exc


def snapshot_from_records(
    records: Sequence[Record],
    column_set: ColumnSet,
    *,
    default_timestamp: Callable[[], int],
) -> WeatherSnapshot:
    """Build a snapshot from a bulk insert batch.

    The first record is always the current conditions; every later record is
    one forecast day, in the order supplied.
    """
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Sequence):
        raise MalformedBulkInsertError("Bulk insert records must be a sequence of mappings")
    if not records:
        raise MalformedBulkInsertError("Bulk insert requires at least one record")

    forecasts = [
        parse_forecast_record(record, column_set, index=index)
        for index, record in enumerate(records[1:], start=1)
    ]
    return parse_current_record(
        records[0],
        column_set,
        forecasts=forecasts,
        default_timestamp=default_timestamp,
    )
