"""Public API for ULID tooling configuration."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    IdSettings,
    LoggingSettings,
    UlidSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "IdSettings",
    "LoggingSettings",
    "UlidSettings",
    "load_settings",
]
