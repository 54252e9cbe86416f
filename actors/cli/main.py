"""ULID command-line actor implemented with Typer."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import typer

from packages.ulid_shared.config import load_settings
from packages.ulid_shared.errors import UlidError
from packages.ulid_shared.ids import (
    Variant,
    check,
    generate,
    timestamp_ms,
    ulid_bytes_to_str,
    ulid_datetime,
    ulid_str_to_bytes,
)
from packages.ulid_shared.logging import bind_context, configure_logging, get_logger

SUCCESS_EXIT_CODE = 0
INVALID_INPUT_EXIT_CODE = 1

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CliConfig:
    """Global CLI runtime options propagated to every command."""

    default_variant: Variant
    as_json: bool


def _emit_output(result: Any, as_json: bool) -> None:
    """Render command output in requested format."""

    if as_json:
        typer.echo(json.dumps(result, sort_keys=True, separators=(",", ":")))
        return
    if isinstance(result, dict):
        for key in sorted(result):
            typer.echo(f"{key}: {result[key]}")
        return
    if isinstance(result, list):
        for item in result:
            typer.echo(str(item))
        return
    typer.echo(str(result))


def _emit_error(exc: Exception, as_json: bool) -> None:
    """Render rejected input to stderr."""

    if as_json:
        payload: dict[str, str] = {"error": str(exc)}
        if isinstance(exc, UlidError):
            payload["code"] = exc.code
        typer.echo(json.dumps(payload, sort_keys=True), err=True)
        return
    typer.echo(f"error: {exc}", err=True)


def _run_command(
    cfg: CliConfig,
    invoke: Callable[[], Any],
    *,
    variant: Variant | None = None,
) -> None:
    """Execute one command and map outputs/errors to process semantics."""
    if variant is not None:
        bind_context(variant=variant.value)
    try:
        result = invoke()
    except ValueError as exc:
        _LOGGER.info("Command rejected input: exception_type=%s", type(exc).__name__)
        _emit_error(exc, cfg.as_json)
        raise typer.Exit(code=INVALID_INPUT_EXIT_CODE) from exc

    _emit_output(result, cfg.as_json)
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""

    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


def _parse_hex(value: str) -> bytes:
    """Parse a hex string, tolerating whitespace and a ``0x`` prefix."""
    cleaned = "".join(value.split())
    if cleaned.lower().startswith("0x"):
        cleaned = cleaned[2:]
    return bytes.fromhex(cleaned)


def _describe(text: str, variant: Variant | None) -> dict[str, Any]:
    """Decode ``text`` and describe its fields."""
    binary = ulid_str_to_bytes(text, variant)
    resolved = variant if variant is not None else Variant.for_length(len(text))
    created = ulid_datetime(binary)
    return {
        "variant": resolved.value if resolved is not None else None,
        "hex": binary.hex(),
        "timestamp_ms": timestamp_ms(binary),
        "datetime": created.isoformat() if created is not None else None,
    }


def _validate(text: str, variant: Variant | None) -> str:
    """Return ``"valid"`` or raise the reason ``text`` is rejected."""
    detail = check(text, variant)
    if detail is not None:
        raise UlidError(detail)
    return "valid"


app = typer.Typer(no_args_is_help=True, help="Generate and convert ULIDs")


@app.callback()
def main(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
    config: Path | None = typer.Option(
        None,
        "--config",
        envvar="ULID_CONFIG_PATH",
        help="Path to a YAML settings file",
    ),
) -> None:
    """Load settings, configure logging, and store global options."""

    settings = load_settings(config_path=config)
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
        command=ctx.invoked_subcommand,
    )

    ctx.obj = CliConfig(
        default_variant=settings.ids.default_variant,
        as_json=as_json,
    )


@app.command("generate")
def generate_command(
    ctx: typer.Context,
    variant: Variant | None = typer.Option(
        None,
        help="Text variant (defaults to the configured variant)",
        case_sensitive=False,
        show_choices=True,
    ),
    timestamp: int | None = typer.Option(
        None,
        min=0,
        help="Unix timestamp in milliseconds (defaults to now)",
    ),
    count: int = typer.Option(1, min=1, help="Number of ULIDs to generate"),
) -> None:
    """Generate new ULIDs."""
    cfg = _require_config(ctx)
    resolved = variant or cfg.default_variant
    _run_command(
        cfg,
        lambda: [generate(resolved, timestamp) for _ in range(count)],
        variant=resolved,
    )


@app.command("encode")
def encode_command(
    ctx: typer.Context,
    value: str = typer.Argument(..., help="16-byte ULID as hex"),
    variant: Variant | None = typer.Option(
        None,
        help="Text variant (defaults to the configured variant)",
        case_sensitive=False,
        show_choices=True,
    ),
) -> None:
    """Encode a binary ULID as text."""
    cfg = _require_config(ctx)
    resolved = variant or cfg.default_variant
    _run_command(
        cfg,
        lambda: ulid_bytes_to_str(_parse_hex(value), resolved),
        variant=resolved,
    )


@app.command("decode")
def decode_command(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Encoded ULID text"),
    variant: Variant | None = typer.Option(
        None,
        help="Text variant (defaults to dispatch by length)",
        case_sensitive=False,
        show_choices=True,
    ),
) -> None:
    """Decode ULID text to hex."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda: ulid_str_to_bytes(text, variant).hex(), variant=variant)


@app.command("validate")
def validate_command(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Encoded ULID text"),
    variant: Variant | None = typer.Option(
        None,
        help="Text variant (defaults to dispatch by length)",
        case_sensitive=False,
        show_choices=True,
    ),
) -> None:
    """Check ULID text without decoding it."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda: _validate(text, variant), variant=variant)


@app.command("inspect")
def inspect_command(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Encoded ULID text"),
    variant: Variant | None = typer.Option(
        None,
        help="Text variant (defaults to dispatch by length)",
        case_sensitive=False,
        show_choices=True,
    ),
) -> None:
    """Show the timestamp and binary form of ULID text."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda: _describe(text, variant), variant=variant)


if __name__ == "__main__":
    app()
