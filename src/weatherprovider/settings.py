from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ProviderSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    column_set: Literal["lineageos", "cyanogenmod"] = "lineageos"
    authority: str | None = None

    @field_validator("authority")
    @classmethod
    def validate_authority(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError("provider.authority must not be empty")
        if "/" in text or ":" in text:
            raise ValueError("provider.authority must be a bare authority like 'lineageos.weather'")
        return text


class LabelSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    locale: str = "en"
    path: Path | None = None

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("labels.locale must not be empty")
        return text

    @field_validator("path")
    @classmethod
    def validate_path(cls, value: Path | None) -> Path | None:
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            raise ValueError("labels.path must not be empty")
        return Path(text)


class ProviderYamlSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    labels: LabelSettings = Field(default_factory=LabelSettings)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    weatherprovider_env: Literal["dev", "test", "prod"] = "dev"
    weatherprovider_config_path: Path = Path("config/weatherprovider.yaml")
    weatherprovider_log_level: str = "INFO"

    @field_validator("weatherprovider_log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level


class AppSettings(BaseModel):
    env: EnvSettings
    yaml: ProviderYamlSettings
    project_root: Path
    config_path: Path
    labels_path: Path | None

    @property
    def log_level(self) -> int:
        return logging.getLevelName(self.env.weatherprovider_log_level)


def _resolve_project_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


def _load_yaml_settings(path: Path) -> ProviderYamlSettings:
    if not path.exists():
        raise FileNotFoundError(f"Weather provider config file not found: {path}")

    raw_config = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError("Weather provider config must be a YAML mapping/object at the top level")
    return ProviderYamlSettings.model_validate(raw_config)


def load_settings_from(config_path: Path, env: EnvSettings | None = None) -> AppSettings:
    env = env or EnvSettings()
    resolved_config = _resolve_project_path(Path(config_path))
    yaml_settings = _load_yaml_settings(resolved_config)

    labels_path = yaml_settings.labels.path
    if labels_path is not None and not labels_path.is_absolute():
        labels_path = (resolved_config.parent / labels_path).resolve()

    return AppSettings(
        env=env,
        yaml=yaml_settings,
        project_root=PROJECT_ROOT,
        config_path=resolved_config,
        labels_path=labels_path,
    )


@lru_cache(maxsize=1)
def load_settings() -> AppSettings:
    env = EnvSettings()
    return load_settings_from(env.weatherprovider_config_path, env)
