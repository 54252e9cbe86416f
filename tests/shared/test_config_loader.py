"""Tests for pydantic-settings-backed ULID configuration loading."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from packages.ulid_shared.config import load_settings
from packages.ulid_shared.ids import Variant


@pytest.fixture(autouse=True)
def _clear_ulid_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove ambient ``ULID_*`` variables so each test controls its sources."""
    for key in [name for name in os.environ if name.upper().startswith("ULID_")]:
        monkeypatch.delenv(key, raising=False)


def _write_config(path: Path, *lines: str) -> Path:
    """Write one YAML settings file."""
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def test_load_settings_uses_precedence_cascade(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Init params should override env, env should override YAML, then defaults."""
    config_file = _write_config(
        tmp_path / "ulid.yaml",
        "logging:",
        "  level: WARNING",
        "  service: from-yaml",
        "ids:",
        "  default_variant: push",
    )
    monkeypatch.setenv("ULID_LOGGING__LEVEL", "ERROR")
    monkeypatch.setenv("ULID_IDS__DEFAULT_VARIANT", "b64")

    settings = load_settings(
        cli_params={"logging": {"level": "DEBUG"}},
        config_path=config_file,
    )

    assert settings.logging.level == "DEBUG"
    assert settings.logging.service == "from-yaml"
    assert settings.ids.default_variant is Variant.B64


def test_load_settings_uses_model_defaults_when_sources_missing(tmp_path: Path) -> None:
    """Settings should fall back to model defaults when env and YAML are absent."""
    settings = load_settings(config_path=tmp_path / "missing.yaml")

    assert settings.logging.level == "WARNING"
    assert settings.logging.json_output is False
    assert settings.logging.service == "ulid"
    assert settings.ids.default_variant is Variant.B32


def test_yaml_values_apply_when_env_is_absent(tmp_path: Path) -> None:
    """YAML file values should override model defaults."""
    config_file = _write_config(
        tmp_path / "ulid.yaml",
        "logging:",
        "  level: info",
        "  json_output: true",
        "ids:",
        "  default_variant: PUSH",
    )

    settings = load_settings(config_path=config_file)

    assert settings.logging.level == "INFO"
    assert settings.logging.json_output is True
    assert settings.ids.default_variant is Variant.PUSH


def test_unknown_variant_in_config_is_rejected(tmp_path: Path) -> None:
    """Variant names outside the closed set must fail validation."""
    config_file = _write_config(
        tmp_path / "ulid.yaml",
        "ids:",
        "  default_variant: base58",
    )

    with pytest.raises(ValidationError):
        load_settings(config_path=config_file)
