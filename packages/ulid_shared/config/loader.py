"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables
3) ~/.config/ulid/ulid.yaml (or an explicit ``config_path``)
4) Model defaults

Environment variable format:
- Prefix: ``ULID_``
- Nested keys: ``__`` separator
- Example: ``ULID_IDS__DEFAULT_VARIANT=b64`` -> ``ids.default_variant = "b64"``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from pydantic_settings import SettingsConfigDict

from .models import UlidSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> UlidSettings:
    """Resolve ``UlidSettings`` from every configured source."""
    settings_cls = _settings_for_path(config_path)
    return settings_cls(**dict(cli_params or {}))


def _settings_for_path(config_path: str | Path | None) -> type[UlidSettings]:
    """Return a settings class reading YAML from ``config_path`` when given."""
    if config_path is None:
        return UlidSettings

    class _PathScopedSettings(UlidSettings):
        model_config = SettingsConfigDict(yaml_file=Path(config_path))

    return _PathScopedSettings
