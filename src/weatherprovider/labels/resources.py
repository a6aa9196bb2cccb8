from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from .base import LabelResourceError

LOGGER = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
RESOURCE_PREFIX = "weather_"

ENGLISH_STRINGS = {
    "weather_0": "Tornado",
    "weather_1": "Tropical storm",
    "weather_2": "Hurricane",
    "weather_3": "Severe thunderstorms",
    "weather_4": "Thunderstorms",
    "weather_5": "Mixed rain and snow",
    "weather_6": "Mixed rain and sleet",
    "weather_7": "Mixed snow and sleet",
    "weather_8": "Freezing drizzle",
    "weather_9": "Drizzle",
    "weather_10": "Freezing rain",
    "weather_11": "Showers",
    "weather_12": "Snow flurries",
    "weather_13": "Light snow showers",
    "weather_14": "Blowing snow",
    "weather_15": "Snow",
    "weather_16": "Hail",
    "weather_17": "Sleet",
    "weather_18": "Dust",
    "weather_19": "Foggy",
    "weather_20": "Haze",
    "weather_21": "Smoky",
    "weather_22": "Blustery",
    "weather_23": "Windy",
    "weather_24": "Cold",
    "weather_25": "Cloudy",
    "weather_26": "Mostly cloudy",
    "weather_27": "Mostly cloudy",
    "weather_28": "Partly cloudy",
    "weather_29": "Partly cloudy",
    "weather_30": "Clear",
    "weather_31": "Sunny",
    "weather_32": "Fair",
    "weather_33": "Fair",
    "weather_34": "Mixed rain and hail",
    "weather_35": "Hot",
    "weather_36": "Isolated thunderstorms",
    "weather_37": "Scattered thunderstorms",
    "weather_38": "Scattered showers",
    "weather_39": "Heavy snow",
    "weather_40": "Scattered snow showers",
    "weather_41": "Partly cloudy",
    "weather_42": "Thundershowers",
    "weather_43": "Snow showers",
    "weather_44": "Isolated thundershowers",
}

BUILTIN_TABLES: dict[str, dict[str, str]] = {DEFAULT_LOCALE: ENGLISH_STRINGS}


def _resource_name(condition_code: int) -> str:
    return f"{RESOURCE_PREFIX}{condition_code}"


def _normalize_locale(locale: str) -> str:
    return locale.strip().replace("-", "_")


def _normalize_table(locale: str, raw_table: Any) -> dict[str, str]:
    if not isinstance(raw_table, dict):
        raise LabelResourceError(f"Label table for locale '{locale}' must be a mapping")

    table: dict[str, str] = {}
    for raw_key, raw_label in raw_table.items():
        key = str(raw_key).strip()
        if not key.startswith(RESOURCE_PREFIX):
            key = f"{RESOURCE_PREFIX}{key}"
        if not isinstance(raw_label, str):
            raise LabelResourceError(f"Label '{key}' for locale '{locale}' must be a string")
        table[key] = raw_label
    return table


def load_label_tables(path: Path) -> dict[str, dict[str, str]]:
    """Load ``{locale: {code: label}}`` string tables from a YAML file.

    Keys may be bare condition codes (``31``) or resource names (``weather_31``).
    """
    if not path.exists():
        raise LabelResourceError(f"Label resource file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise LabelResourceError(f"Label resource file is not valid YAML: {path}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise LabelResourceError("Label resource file must be a mapping of locale to labels")

    return {
        _normalize_locale(str(locale)): _normalize_table(str(locale), table)
        for locale, table in raw.items()
    }


class ResourceLabelResolver:
    """Resolves condition codes through per-locale string tables.

    Lookup walks the exact locale, then its language, then the default
    locale. A code with no resource in any of them resolves to ``""``.
    """

    def __init__(
        self,
        *,
        locale: str = DEFAULT_LOCALE,
        tables: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        merged: dict[str, dict[str, str]] = {
            name: dict(table) for name, table in BUILTIN_TABLES.items()
        }
        for name, table in (tables or {}).items():
            merged.setdefault(_normalize_locale(name), {}).update(table)
        self._tables = merged
        self._locale = _normalize_locale(locale) or DEFAULT_LOCALE

    @classmethod
    def from_file(cls, path: Path, *, locale: str = DEFAULT_LOCALE) -> ResourceLabelResolver:
        tables = load_label_tables(path)
        LOGGER.info("Loaded condition labels for %d locale(s) from %s", len(tables), path)
        return cls(locale=locale, tables=tables)

    @property
    def locale(self) -> str:
        return self._locale

    def _lookup_chain(self) -> list[str]:
        chain = [self._locale]
        language = self._locale.split("_", 1)[0]
        if language not in chain:
            chain.append(language)
        if DEFAULT_LOCALE not in chain:
            chain.append(DEFAULT_LOCALE)
        return chain

    def label_for(self, condition_code: int) -> str:
        name = _resource_name(condition_code)
        for locale in self._lookup_chain():
            label = self._tables.get(locale, {}).get(name)
            if label is not None:
                return label
        return ""
