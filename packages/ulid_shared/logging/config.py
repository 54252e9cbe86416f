"""Logging setup for ULID tooling entrypoints.

Library modules only call ``get_logger``; the CLI installs the single root
handler through ``configure_logging``. Records carry three layers of fields:

- core: ``timestamp``, ``level``, ``logger``, ``message`` (and ``exception``)
- process: ``service`` and ``environment`` from ``LoggingSettings``
- invocation: ``command`` (the CLI subcommand) and ``variant`` (the ULID text
  variant being generated or parsed)

Process and invocation fields are context-bound, so every line logged during
one CLI command names the command and variant it belongs to. Output goes to
stderr; stdout is reserved for command results.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from . import fields
from .context import bind_context, get_context

# Context fields rendered first, in this order; any other bound keys follow sorted.
_ORDERED_CONTEXT = (fields.SERVICE, fields.ENVIRONMENT, fields.COMMAND, fields.VARIANT)


def _ordered_context(context: dict[str, str]) -> list[tuple[str, str]]:
    known = [(key, context[key]) for key in _ORDERED_CONTEXT if key in context]
    extra = sorted(
        (key, value) for key, value in context.items() if key not in _ORDERED_CONTEXT
    )
    return known + extra


def _record_time(record: logging.LogRecord) -> str:
    """Render the record creation time as millisecond UTC ISO-8601."""
    created = datetime.fromtimestamp(record.created, tz=UTC)
    return created.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ContextFilter(logging.Filter):
    """Attach the currently bound context to each record as ``record.context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = get_context()
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line: core fields, then bound context."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            fields.TIMESTAMP: _record_time(record),
            fields.LEVEL: record.levelname,
            fields.LOGGER: record.name,
            fields.MESSAGE: record.getMessage(),
        }
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            for key, value in _ordered_context(context):
                payload.setdefault(key, value)
        if record.exc_info:
            payload[fields.EXCEPTION] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """``<time> <LEVEL> <logger> <message> key=value ...`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"{_record_time(record)} {record.levelname} {record.name} "
            f"{record.getMessage()}"
        )
        context = getattr(record, "context", None)
        if isinstance(context, dict) and context:
            line += " " + " ".join(
                f"{key}={value}" for key, value in _ordered_context(context)
            )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(
    *,
    level: str = "WARNING",
    json_output: bool = False,
    service: str | None = None,
    environment: str | None = None,
    command: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Install one root handler and seed process and invocation context.

    Calling this again replaces the previous handler. ``service``,
    ``environment`` and ``command`` are bound into the log context when given;
    ``variant`` is bound later by the command once it is resolved.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.addFilter(ContextFilter())
    handler.setFormatter(JsonFormatter() if json_output else PlainFormatter())
    root.addHandler(handler)

    bind_context(
        **{
            fields.SERVICE: service or None,
            fields.ENVIRONMENT: environment or None,
            fields.COMMAND: command or None,
        }
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger using Python's standard logging hierarchy."""
    return logging.getLogger(name)
