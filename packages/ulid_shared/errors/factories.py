"""Factory helpers for creating consistent ULID errors."""

from __future__ import annotations

from typing import Mapping

from . import codes
from .types import ErrorCategory, ErrorDetail


def format_error(
    message: str,
    *,
    code: str = codes.INVALID_CHARACTER,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create a format-category error."""
    return ErrorDetail(
        code=code,
        message=message,
        category=ErrorCategory.FORMAT,
        metadata=_meta(metadata),
    )


def range_error(
    message: str,
    *,
    code: str = codes.LEADING_CHARACTER_OUT_OF_RANGE,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create a range-category error."""
    return ErrorDetail(
        code=code,
        message=message,
        category=ErrorCategory.RANGE,
        metadata=_meta(metadata),
    )


def environment_error(
    message: str,
    *,
    code: str = codes.SHORT_ENTROPY_READ,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create an environment-category error."""
    return ErrorDetail(
        code=code,
        message=message,
        category=ErrorCategory.ENVIRONMENT,
        metadata=_meta(metadata),
    )


def _meta(metadata: Mapping[str, str] | None) -> dict[str, str]:
    """Normalize optional metadata into a mutable plain dict."""
    if metadata is None:
        return {}
    return dict(metadata)
