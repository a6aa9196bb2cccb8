from __future__ import annotations


class WeatherProviderError(RuntimeError):
    """Base class for faults raised by the weather content provider."""


class InvalidUriError(WeatherProviderError, ValueError):
    """Raised when a request URI does not match a supported weather selector."""


class MalformedBulkInsertError(WeatherProviderError, ValueError):
    """Raised when a bulk insert batch cannot be turned into a weather snapshot."""
