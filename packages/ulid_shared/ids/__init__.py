"""Shared ULID primitives: generation, text codecs, and binary storage."""

from packages.ulid_shared.ids.codec import (
    MAX_DATETIME_MS,
    check,
    decode,
    encode,
    is_valid,
    require_ulid_bytes,
    timestamp_ms,
    ulid_bytes_to_str,
    ulid_datetime,
    ulid_str_to_bytes,
)
from packages.ulid_shared.ids.constants import ULID_BYTES_LENGTH
from packages.ulid_shared.ids.generator import (
    UlidGenerator,
    bingenerate,
    generate,
    wall_clock_ms,
)
from packages.ulid_shared.ids.sqlalchemy import (
    ULIDType,
    ulid_length_check,
    ulid_primary_key_column,
)
from packages.ulid_shared.ids.variants import Variant

__all__ = [
    "MAX_DATETIME_MS",
    "ULID_BYTES_LENGTH",
    "ULIDType",
    "UlidGenerator",
    "Variant",
    "bingenerate",
    "check",
    "decode",
    "encode",
    "generate",
    "is_valid",
    "require_ulid_bytes",
    "timestamp_ms",
    "ulid_length_check",
    "ulid_primary_key_column",
    "ulid_bytes_to_str",
    "ulid_datetime",
    "ulid_str_to_bytes",
    "wall_clock_ms",
]
