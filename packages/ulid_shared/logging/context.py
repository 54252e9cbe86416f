"""Context propagation for structured ULID tooling logs.

Fields bound here (for example the active CLI command or variant) are attached
to every record emitted while they are bound. Storage is a ``ContextVar`` so
threads and asyncio tasks each see their own bindings.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

_LOG_CONTEXT: ContextVar[Mapping[str, str]] = ContextVar("ulid_log_context", default={})


def get_context() -> dict[str, str]:
    """Return a copy of the fields bound in the current context."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> None:
    """Bind stringified values into the current context, skipping ``None``."""
    updates = {str(key): str(value) for key, value in values.items() if value is not None}
    if updates:
        _LOG_CONTEXT.set({**_LOG_CONTEXT.get(), **updates})


def clear_context(*keys: str) -> None:
    """Drop ``keys`` from the current context, or every field when none given."""
    if not keys:
        _LOG_CONTEXT.set({})
        return
    remaining = {key: value for key, value in _LOG_CONTEXT.get().items() if key not in keys}
    _LOG_CONTEXT.set(remaining)


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind ``values`` for the duration of a block, then restore prior fields."""
    token = _LOG_CONTEXT.set(_LOG_CONTEXT.get())
    try:
        bind_context(**dict(values))
        yield
    finally:
        _LOG_CONTEXT.reset(token)
