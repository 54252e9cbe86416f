"""Public ULID error API."""

from . import codes
from .factories import environment_error, format_error, range_error
from .types import ErrorCategory, ErrorDetail, UlidEnvironmentError, UlidError

__all__ = [
    "ErrorCategory",
    "ErrorDetail",
    "UlidEnvironmentError",
    "UlidError",
    "codes",
    "environment_error",
    "format_error",
    "range_error",
]
