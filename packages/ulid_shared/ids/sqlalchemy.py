"""SQLAlchemy helpers for ULID-backed columns.

ULIDs are stored as their 16-byte binary form, the same width as a UUID column,
and surface in Python as text in one configured variant.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import CheckConstraint, Column, LargeBinary
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator

from packages.ulid_shared.errors import UlidError
from packages.ulid_shared.logging import get_logger

from .codec import ulid_bytes_to_str, ulid_str_to_bytes
from .constants import ULID_BYTES_LENGTH
from .generator import generate
from .variants import Variant

_LOGGER = get_logger(__name__)


class ULIDType(TypeDecorator[str]):
    """Column type storing ULID text as canonical 16-byte binary."""

    impl = LargeBinary(ULID_BYTES_LENGTH)
    cache_ok = True

    def __init__(self, variant: Variant | str = Variant.B32) -> None:
        super().__init__()
        self.variant = Variant.parse(variant)

    @property
    def python_type(self) -> type[str]:
        """Return the Python type values load as."""
        return str

    def process_bind_param(self, value: Any, dialect: Dialect) -> bytes | None:
        """Convert variant text into binary for storage."""
        if value is None:
            return None
        try:
            return ulid_str_to_bytes(value, self.variant)
        except UlidError as exc:
            _LOGGER.warning(
                "Rejected ULID bind value: variant=%s code=%s",
                self.variant.value,
                exc.code,
            )
            raise

    def process_result_value(self, value: Any, dialect: Dialect) -> str | None:
        """Convert stored binary back into variant text."""
        if value is None:
            return None
        return ulid_bytes_to_str(value, self.variant)


def ulid_primary_key_column(
    name: str = "id",
    *,
    variant: Variant | str = Variant.B32,
    autogenerate: bool = True,
    length_constraint_name: str | None = None,
) -> Column[str]:
    """Return a standard ULID primary-key column definition.

    Values are generated in application code when ``autogenerate`` is set, and
    storage is constrained to exactly 16 bytes.
    """
    resolved = Variant.parse(variant)
    constraint = ulid_length_check(
        name,
        length_constraint_name or f"ck_{name}_ulid_16",
    )
    default = (lambda: generate(resolved)) if autogenerate else None
    return Column(
        name,
        ULIDType(resolved),
        constraint,
        primary_key=True,
        nullable=False,
        default=default,
    )


def ulid_length_check(column_name: str, constraint_name: str) -> CheckConstraint:
    """Return a CHECK constraint enforcing fixed 16-byte ULID storage."""
    return CheckConstraint(
        f"length({column_name}) = {ULID_BYTES_LENGTH}",
        name=constraint_name,
    )
