"""Canonical ULID error types.

Value-level failures are described by ``ErrorDetail`` and returned to callers;
``UlidError`` wraps one detail for the strict helpers that must raise.
Environment failures (an unusable entropy source) raise
``UlidEnvironmentError``, which is not a ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class ErrorCategory(str, Enum):
    """High-level ULID error categories."""

    FORMAT = "format"
    RANGE = "range"
    ENVIRONMENT = "environment"


@dataclass(frozen=True)
class ErrorDetail:
    """Structured description of one rejected ULID input."""

    code: str
    message: str
    category: ErrorCategory
    metadata: Mapping[str, str] = field(default_factory=dict)


class _DetailCarrier:
    """Accessors shared by exceptions wrapping one ``ErrorDetail``."""

    detail: ErrorDetail

    @property
    def code(self) -> str:
        """Return the machine-readable error code."""
        return self.detail.code

    @property
    def category(self) -> ErrorCategory:
        """Return the error category."""
        return self.detail.category


class UlidError(_DetailCarrier, ValueError):
    """Raised by strict ULID helpers when input cannot be converted."""

    def __init__(self, detail: ErrorDetail) -> None:
        super().__init__(detail.message)
        self.detail = detail


class UlidEnvironmentError(_DetailCarrier, RuntimeError):
    """Raised when the runtime cannot supply what a new ULID needs."""

    def __init__(self, detail: ErrorDetail) -> None:
        super().__init__(detail.message)
        self.detail = detail
