from .cache import WeatherCache

__all__ = ["WeatherCache"]
