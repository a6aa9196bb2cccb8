"""Shared test fixtures."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest
import yaml

from weatherprovider.contract import WeatherColumns
from weatherprovider.labels import ResourceLabelResolver
from weatherprovider.notifications import ChangeNotifier
from weatherprovider.provider import CYANOGENMOD_COLUMNS, WeatherContentProvider

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def springfield_records() -> list[dict[str, Any]]:
    """One current record followed by two forecast days."""
    return [
        {
            WeatherColumns.CURRENT_CITY: "Springfield",
            WeatherColumns.CURRENT_TEMPERATURE: 72,
            WeatherColumns.CURRENT_TEMPERATURE_UNIT: 2,
            WeatherColumns.CURRENT_CONDITION_CODE: 1,
            WeatherColumns.CURRENT_TIMESTAMP: 1000,
        },
        {
            WeatherColumns.FORECAST_LOW: 60,
            WeatherColumns.FORECAST_HIGH: 75,
            WeatherColumns.FORECAST_CONDITION_CODE: 2,
        },
        {
            WeatherColumns.FORECAST_LOW: 58,
            WeatherColumns.FORECAST_HIGH: 70,
            WeatherColumns.FORECAST_CONDITION_CODE: 3,
        },
    ]


@pytest.fixture
def notifier() -> ChangeNotifier:
    return ChangeNotifier()


@pytest.fixture
def provider(notifier: ChangeNotifier) -> WeatherContentProvider:
    """Provider with the default (lineageos) column set and English labels."""
    return WeatherContentProvider(
        notifier=notifier,
        label_resolver=ResourceLabelResolver(),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def legacy_provider() -> WeatherContentProvider:
    return WeatherContentProvider(column_set=CYANOGENMOD_COLUMNS, clock=lambda: FIXED_NOW)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid provider config and return its path."""
    data = {
        "provider": {"column_set": "lineageos"},
        "labels": {"locale": "en"},
    }
    path = tmp_path / "weatherprovider.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
