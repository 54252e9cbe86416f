"""ULID generation from a clock and a cryptographic entropy source.

Both capabilities are injectable so generation stays deterministic under test.
The default clock is wall-clock Unix milliseconds and the default entropy source
is ``secrets.token_bytes``. Exceptions from the entropy source propagate to the
caller untouched; a source that returns the wrong width raises
``UlidEnvironmentError``.
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from typing import Callable

from packages.ulid_shared.errors import (
    UlidEnvironmentError,
    UlidError,
    codes,
    environment_error,
    range_error,
)

from .codec import ulid_bytes_to_str
from .constants import MAX_TIMESTAMP_MS, RANDOMNESS_BYTES_LENGTH, TIMESTAMP_BYTES_LENGTH
from .variants import Variant


def wall_clock_ms() -> int:
    """Return the current Unix time in whole milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class UlidGenerator:
    """Generate binary and encoded ULIDs from injected capabilities."""

    clock: Callable[[], int] = field(default=wall_clock_ms)
    entropy: Callable[[int], bytes] = field(default=secrets.token_bytes)

    def bingenerate(self, timestamp_ms: int | None = None) -> bytes:
        """Generate a new ULID as canonical 16-byte big-endian binary.

        Timestamp occupies the high 48 bits (milliseconds since epoch), and the
        remaining 80 bits are cryptographically secure random entropy.
        """
        ts_ms = self.clock() if timestamp_ms is None else int(timestamp_ms)
        if ts_ms < 0 or ts_ms > MAX_TIMESTAMP_MS:
            raise UlidError(
                range_error(
                    "timestamp_ms out of ULID 48-bit range",
                    code=codes.TIMESTAMP_OUT_OF_RANGE,
                    metadata={"timestamp_ms": str(ts_ms)},
                )
            )

        randomness = self.entropy(RANDOMNESS_BYTES_LENGTH)
        if len(randomness) != RANDOMNESS_BYTES_LENGTH:
            raise UlidEnvironmentError(
                environment_error(
                    f"entropy source returned {len(randomness)} bytes, "
                    f"expected {RANDOMNESS_BYTES_LENGTH}",
                    metadata={"returned": str(len(randomness))},
                )
            )
        return ts_ms.to_bytes(TIMESTAMP_BYTES_LENGTH, byteorder="big") + randomness

    def generate(
        self,
        variant: Variant | str | None = None,
        timestamp_ms: int | None = None,
    ) -> str:
        """Generate a new ULID encoded as ``variant`` text (Base32 by default)."""
        resolved = Variant.B32 if variant is None else Variant.parse(variant)
        return ulid_bytes_to_str(self.bingenerate(timestamp_ms), resolved)


_DEFAULT_GENERATOR = UlidGenerator()


def bingenerate(timestamp_ms: int | None = None) -> bytes:
    """Generate a 16-byte ULID using the process clock and ``secrets``."""
    return _DEFAULT_GENERATOR.bingenerate(timestamp_ms)


def generate(
    variant: Variant | str | None = None,
    timestamp_ms: int | None = None,
) -> str:
    """Generate an encoded ULID using the process clock and ``secrets``."""
    return _DEFAULT_GENERATOR.generate(variant, timestamp_ms)
