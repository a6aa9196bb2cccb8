"""Tests for turning bulk insert batches into snapshots."""

import math

import pytest

from weatherprovider.contract import TemperatureUnit, WeatherColumns
from weatherprovider.provider import (
    CYANOGENMOD_COLUMNS,
    LINEAGEOS_COLUMNS,
    MalformedBulkInsertError,
    snapshot_from_records,
)


def _build(records, column_set=LINEAGEOS_COLUMNS):
    return snapshot_from_records(records, column_set, default_timestamp=lambda: 4242)


class TestSnapshotFromRecords:
    def test_first_record_is_current(self, springfield_records):
        snapshot = _build(springfield_records)
        assert snapshot.city == "Springfield"
        assert snapshot.temperature == 72.0
        assert snapshot.temperature_unit == TemperatureUnit.FAHRENHEIT
        assert snapshot.condition_code == 1
        assert snapshot.timestamp == 1000

    def test_forecast_order_preserved(self, springfield_records):
        snapshot = _build(springfield_records)
        assert [(d.low, d.high, d.condition_code) for d in snapshot.forecasts] == [
            (60.0, 75.0, 2),
            (58.0, 70.0, 3),
        ]

    def test_forecast_count_is_records_minus_one(self, springfield_records):
        extra = {WeatherColumns.FORECAST_CONDITION_CODE: 31}
        snapshot = _build(springfield_records + [extra, extra])
        assert len(snapshot.forecasts) == 4

    def test_empty_batch_rejected(self):
        with pytest.raises(MalformedBulkInsertError):
            _build([])

    @pytest.mark.parametrize(
        "column",
        [
            WeatherColumns.CURRENT_CITY,
            WeatherColumns.CURRENT_TEMPERATURE,
            WeatherColumns.CURRENT_TEMPERATURE_UNIT,
        ],
    )
    def test_missing_required_current_field(self, springfield_records, column):
        del springfield_records[0][column]
        with pytest.raises(MalformedBulkInsertError, match=column):
            _build(springfield_records)

    def test_nan_temperature_counts_as_missing(self, springfield_records):
        springfield_records[0][WeatherColumns.CURRENT_TEMPERATURE] = math.nan
        with pytest.raises(MalformedBulkInsertError):
            _build(springfield_records)

    def test_timestamp_defaults_to_clock(self, springfield_records):
        del springfield_records[0][WeatherColumns.CURRENT_TIMESTAMP]
        assert _build(springfield_records).timestamp == 4242

    def test_nan_optional_values_are_unset(self, springfield_records):
        springfield_records[0][WeatherColumns.CURRENT_HUMIDITY] = math.nan
        springfield_records[1][WeatherColumns.FORECAST_LOW] = math.nan
        snapshot = _build(springfield_records)
        assert snapshot.humidity is None
        assert snapshot.forecasts[0].low is None

    def test_zero_values_are_kept(self, springfield_records):
        springfield_records[0][WeatherColumns.CURRENT_HUMIDITY] = 0
        springfield_records[0][WeatherColumns.TODAYS_LOW_TEMPERATURE] = 0.0
        snapshot = _build(springfield_records)
        assert snapshot.humidity == 0.0
        assert snapshot.todays_low == 0.0

    def test_numeric_strings_are_coerced(self, springfield_records):
        springfield_records[0][WeatherColumns.CURRENT_TEMPERATURE] = "18.5"
        springfield_records[0][WeatherColumns.CURRENT_TEMPERATURE_UNIT] = "1"
        snapshot = _build(springfield_records)
        assert snapshot.temperature == 18.5
        assert snapshot.temperature_unit == TemperatureUnit.CELSIUS

    def test_garbage_value_rejected(self, springfield_records):
        springfield_records[1][WeatherColumns.FORECAST_HIGH] = "warm"
        with pytest.raises(MalformedBulkInsertError, match="records\\[1\\]"):
            _build(springfield_records)

    def test_fractional_code_rejected(self, springfield_records):
        springfield_records[2][WeatherColumns.FORECAST_CONDITION_CODE] = 2.5
        with pytest.raises(MalformedBulkInsertError):
            _build(springfield_records)

    def test_non_mapping_record_rejected(self, springfield_records):
        springfield_records[1] = ["not", "a", "record"]
        with pytest.raises(MalformedBulkInsertError):
            _build(springfield_records)

    @pytest.mark.parametrize("batch", ["Springfield", 42, None])
    def test_non_sequence_batch_rejected(self, batch):
        with pytest.raises(MalformedBulkInsertError):
            _build(batch)

    def test_mapping_batch_rejected(self, springfield_records):
        with pytest.raises(MalformedBulkInsertError):
            _build(springfield_records[0])

    def test_tuple_batch_accepted(self, springfield_records):
        assert len(_build(tuple(springfield_records)).forecasts) == 2

    def test_legacy_columns_require_city_id(self, springfield_records):
        with pytest.raises(MalformedBulkInsertError, match="city_id"):
            _build(springfield_records, CYANOGENMOD_COLUMNS)

    def test_legacy_columns_ignore_todays_high(self, springfield_records):
        springfield_records[0][WeatherColumns.CURRENT_CITY_ID] = "2405240"
        springfield_records[0][WeatherColumns.TODAYS_HIGH_TEMPERATURE] = 80
        snapshot = _build(springfield_records, CYANOGENMOD_COLUMNS)
        assert snapshot.city_id == "2405240"
        assert snapshot.todays_high is None
