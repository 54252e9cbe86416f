"""Typed configuration models for ULID tooling."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from packages.ulid_shared.ids.variants import Variant

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "ulid" / "ulid.yaml"


class LoggingSettings(BaseModel):
    """Logging configuration applied by entrypoints."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    json_output: bool = False
    service: str = "ulid"
    environment: str = "dev"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        """Accept level names in any case."""
        if isinstance(value, str):
            return value.strip().upper()
        return value


class IdSettings(BaseModel):
    """Identifier defaults used when a caller does not name a variant."""

    default_variant: Variant = Variant.B32

    @field_validator("default_variant", mode="before")
    @classmethod
    def _parse_variant(cls, value: object) -> object:
        """Normalize variant names before enum validation."""
        if isinstance(value, str):
            return value.strip().lower()
        return value


class UlidSettings(BaseSettings):
    """Root settings resolved from init/env/yaml/default sources."""

    model_config = SettingsConfigDict(
        env_prefix="ULID_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
        yaml_file=DEFAULT_CONFIG_PATH,
        yaml_file_encoding="utf-8",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    ids: IdSettings = Field(default_factory=IdSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply precedence: init > env > yaml > model defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
        )
