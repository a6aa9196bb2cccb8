from __future__ import annotations

from enum import IntEnum

DEFAULT_AUTHORITY = "lineageos.weather"
LEGACY_AUTHORITY = "cmweather"
CONTENT_SCHEME = "content"

CURRENT_AND_FORECAST_PATH = "weather/current_and_forecast"
CURRENT_PATH = "weather/current"
FORECAST_PATH = "weather/forecast"


class WeatherColumns:
    CURRENT_CITY_ID = "city_id"
    CURRENT_CITY = "city"
    CURRENT_CONDITION = "condition"
    CURRENT_CONDITION_CODE = "condition_code"
    CURRENT_TEMPERATURE = "temperature"
    CURRENT_TEMPERATURE_UNIT = "temperature_unit"
    CURRENT_HUMIDITY = "humidity"
    CURRENT_WIND_SPEED = "wind_speed"
    CURRENT_WIND_SPEED_UNIT = "wind_speed_unit"
    CURRENT_WIND_DIRECTION = "wind_direction"
    CURRENT_TIMESTAMP = "timestamp"
    TODAYS_HIGH_TEMPERATURE = "todays_high"
    TODAYS_LOW_TEMPERATURE = "todays_low"

    FORECAST_LOW = "forecast_low"
    FORECAST_HIGH = "forecast_high"
    FORECAST_CONDITION = "forecast_condition"
    FORECAST_CONDITION_CODE = "forecast_condition_code"


class TemperatureUnit(IntEnum):
    CELSIUS = 1
    FAHRENHEIT = 2


class WindSpeedUnit(IntEnum):
    KPH = 1
    MPH = 2


class WeatherCode(IntEnum):
    TORNADO = 0
    TROPICAL_STORM = 1
    HURRICANE = 2
    SEVERE_THUNDERSTORMS = 3
    THUNDERSTORMS = 4
    MIXED_RAIN_AND_SNOW = 5
    MIXED_RAIN_AND_SLEET = 6
    MIXED_SNOW_AND_SLEET = 7
    FREEZING_DRIZZLE = 8
    DRIZZLE = 9
    FREEZING_RAIN = 10
    SHOWERS = 11
    SNOW_FLURRIES = 12
    LIGHT_SNOW_SHOWERS = 13
    BLOWING_SNOW = 14
    SNOW = 15
    HAIL = 16
    SLEET = 17
    DUST = 18
    FOGGY = 19
    HAZE = 20
    SMOKY = 21
    BLUSTERY = 22
    WINDY = 23
    COLD = 24
    CLOUDY = 25
    MOSTLY_CLOUDY_NIGHT = 26
    MOSTLY_CLOUDY_DAY = 27
    PARTLY_CLOUDY_NIGHT = 28
    PARTLY_CLOUDY_DAY = 29
    CLEAR_NIGHT = 30
    SUNNY = 31
    FAIR_NIGHT = 32
    FAIR_DAY = 33
    MIXED_RAIN_AND_HAIL = 34
    HOT = 35
    ISOLATED_THUNDERSTORMS = 36
    SCATTERED_THUNDERSTORMS = 37
    SCATTERED_SHOWERS = 38
    HEAVY_SNOW = 39
    SCATTERED_SNOW_SHOWERS = 40
    PARTLY_CLOUDY = 41
    THUNDERSHOWER = 42
    SNOW_SHOWERS = 43
    ISOLATED_THUNDERSHOWERS = 44
    NOT_AVAILABLE = 3200


def content_uri(authority: str, path: str) -> str:
    return f"{CONTENT_SCHEME}://{authority}/{path.strip('/')}"


def change_uris(authority: str) -> tuple[str, str, str]:
    """Return the combined, current and forecast change channels for an authority."""
    return (
        content_uri(authority, CURRENT_AND_FORECAST_PATH),
        content_uri(authority, CURRENT_PATH),
        content_uri(authority, FORECAST_PATH),
    )
