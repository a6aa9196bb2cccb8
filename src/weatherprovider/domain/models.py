from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..contract import TemperatureUnit, WeatherCode, WindSpeedUnit


def _unset_if_nan(value: Any) -> Any:
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class DayForecast(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    condition_code: int = WeatherCode.NOT_AVAILABLE
    low: float | None = None
    high: float | None = None

    @field_validator("low", "high", mode="before")
    @classmethod
    def validate_optional_temperature(cls, value: Any) -> Any:
        return _unset_if_nan(value)


class WeatherSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    city: str
    city_id: str | None = None
    condition_code: int = WeatherCode.NOT_AVAILABLE
    temperature: float = Field(allow_inf_nan=False)
    temperature_unit: TemperatureUnit
    humidity: float | None = None
    wind_speed: float | None = None
    wind_direction: float | None = None
    wind_speed_unit: WindSpeedUnit | None = None
    todays_high: float | None = None
    todays_low: float | None = None
    timestamp: int
    forecasts: tuple[DayForecast, ...] = ()

    @field_validator("city")
    @classmethod
    def validate_city(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("city must not be empty")
        return text

    @field_validator("city_id")
    @classmethod
    def validate_city_id(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        return text or None

    @field_validator(
        "humidity",
        "wind_speed",
        "wind_direction",
        "todays_high",
        "todays_low",
        mode="before",
    )
    @classmethod
    def validate_optional_measurement(cls, value: Any) -> Any:
        return _unset_if_nan(value)

    @model_validator(mode="before")
    @classmethod
    def validate_wind(cls, data: Any) -> Any:
        # Wind is only meaningful as a speed/direction pair; a half-set pair
        # drops speed, direction and unit together.
        if not isinstance(data, dict):
            return data
        speed = _unset_if_nan(data.get("wind_speed"))
        direction = _unset_if_nan(data.get("wind_direction"))
        if speed is not None and direction is not None:
            return data
        cleaned = dict(data)
        cleaned["wind_speed"] = None
        cleaned["wind_direction"] = None
        cleaned["wind_speed_unit"] = None
        return cleaned

    @property
    def has_wind(self) -> bool:
        return self.wind_speed is not None and self.wind_direction is not None
