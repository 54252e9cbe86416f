"""Closed enumeration of ULID text variants."""

from __future__ import annotations

from enum import Enum

from packages.ulid_shared.errors import UlidError, codes, format_error

from .constants import BASE32_LENGTH, BASE64_LENGTH, PUSH_KEY_LENGTH


class Variant(str, Enum):
    """Text encodings supported for one 16-byte ULID.

    ``B32`` is canonical Crockford Base32, ``B64`` a lexicographic Base64
    alphabet with full 128-bit fidelity, and ``PUSH`` the 20-character
    push-key layout that drops the first randomness byte.
    """

    B32 = "b32"
    B64 = "b64"
    PUSH = "push"

    @property
    def text_length(self) -> int:
        """Return the fixed encoded length for this variant."""
        return _LENGTHS[self]

    @classmethod
    def for_length(cls, length: int) -> Variant | None:
        """Return the variant whose encoded form has ``length`` characters."""
        return _BY_LENGTH.get(length)

    @classmethod
    def parse(cls, value: Variant | str) -> Variant:
        """Normalize an enum member or its string value into a ``Variant``."""
        if isinstance(value, Variant):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(member.value for member in cls)
        raise UlidError(
            format_error(
                f"ULID variant must be one of [{choices}], got {value!r}",
                code=codes.INVALID_VARIANT,
            )
        )


_LENGTHS = {
    Variant.B32: BASE32_LENGTH,
    Variant.B64: BASE64_LENGTH,
    Variant.PUSH: PUSH_KEY_LENGTH,
}
_BY_LENGTH = {length: variant for variant, length in _LENGTHS.items()}
