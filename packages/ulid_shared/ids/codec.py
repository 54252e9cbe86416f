"""ULID binary/text conversion for every supported variant.

The canonical binary form is 16 big-endian bytes: a 48-bit millisecond
timestamp followed by 80 bits of randomness. Each text variant is described by
one ``_TextFormat`` record (alphabet, symbol width, payload packing) and all
variants share the same bit-slicing and table-lookup path.

Expected invalid input is reported as a value (``None``, ``False``, or an
``ErrorDetail``). Only the ``ulid_*``/``require_*`` helpers raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Callable

from packages.ulid_shared.errors import (
    ErrorDetail,
    UlidError,
    codes,
    format_error,
    range_error,
)
from packages.ulid_shared.logging import get_logger

from .bits import (
    INVALID_SYMBOL,
    build_decode_table,
    int_to_symbols,
    leading_symbol_bits,
    symbols_to_int,
)
from .constants import (
    BASE32_ALPHABET,
    BASE64_ALPHABET,
    PUSH_FILLER_OFFSET,
    PUSH_PAYLOAD_BITS,
    TIMESTAMP_BYTES_LENGTH,
    ULID_BITS,
    ULID_BYTES_LENGTH,
)
from .variants import Variant

_LOGGER = get_logger(__name__)

_ULID_MASK = (1 << ULID_BITS) - 1

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Last millisecond a ``datetime`` can hold.
MAX_DATETIME_MS = (datetime.max.replace(tzinfo=UTC) - _UNIX_EPOCH) // timedelta(
    milliseconds=1
)


@dataclass(frozen=True)
class _TextFormat:
    """Bit layout and alphabet for one text variant."""

    variant: Variant
    alphabet: str
    symbol_bits: int
    payload_bits: int
    reject_leading_overflow: bool
    to_payload: Callable[[bytes], int]
    from_payload: Callable[[int], bytes]

    @property
    def length(self) -> int:
        """Return the fixed number of symbols in the encoded text."""
        return self.variant.text_length

    @property
    def decode_table(self) -> tuple[int, ...]:
        """Return the byte -> symbol lookup table for this alphabet."""
        return _DECODE_TABLES[self.alphabet]

    @property
    def leading_max(self) -> int:
        """Return the largest value the leading symbol can carry."""
        return (1 << leading_symbol_bits(self.payload_bits, self.symbol_bits)) - 1


def _full_payload(value: bytes) -> int:
    return int.from_bytes(value, byteorder="big", signed=False)


def _full_binary(number: int) -> bytes:
    # A Base64 leading symbol holds 6 bits but only the low 2 are significant.
    return (number & _ULID_MASK).to_bytes(ULID_BYTES_LENGTH, byteorder="big", signed=False)


def _push_payload(value: bytes) -> int:
    payload = value[:PUSH_FILLER_OFFSET] + value[PUSH_FILLER_OFFSET + 1 :]
    return int.from_bytes(payload, byteorder="big", signed=False)


def _push_binary(number: int) -> bytes:
    payload = number.to_bytes(PUSH_PAYLOAD_BITS // 8, byteorder="big", signed=False)
    return payload[:PUSH_FILLER_OFFSET] + b"\x00" + payload[PUSH_FILLER_OFFSET:]


_DECODE_TABLES = {
    BASE32_ALPHABET: build_decode_table(BASE32_ALPHABET),
    BASE64_ALPHABET: build_decode_table(BASE64_ALPHABET),
}

_FORMATS = {
    Variant.B32: _TextFormat(
        variant=Variant.B32,
        alphabet=BASE32_ALPHABET,
        symbol_bits=5,
        payload_bits=ULID_BITS,
        reject_leading_overflow=True,
        to_payload=_full_payload,
        from_payload=_full_binary,
    ),
    Variant.B64: _TextFormat(
        variant=Variant.B64,
        alphabet=BASE64_ALPHABET,
        symbol_bits=6,
        payload_bits=ULID_BITS,
        reject_leading_overflow=False,
        to_payload=_full_payload,
        from_payload=_full_binary,
    ),
    Variant.PUSH: _TextFormat(
        variant=Variant.PUSH,
        alphabet=BASE64_ALPHABET,
        symbol_bits=6,
        payload_bits=PUSH_PAYLOAD_BITS,
        reject_leading_overflow=False,
        to_payload=_push_payload,
        from_payload=_push_binary,
    ),
}


def encode(value: bytes, variant: Variant | str = Variant.B32) -> str | None:
    """Encode a 16-byte ULID into ``variant`` text.

    Returns ``None`` when ``value`` is not exactly 16 bytes.
    """
    text_format = _FORMATS[Variant.parse(variant)]
    binary = _as_ulid_bytes(value)
    if binary is None:
        return None
    return _encode_checked(binary, text_format)


def decode(text: str, variant: Variant | str | None = None) -> bytes | None:
    """Decode ULID text into its 16-byte binary form.

    When ``variant`` is omitted the format is chosen by text length alone
    (26 Base32, 22 Base64, 20 push key). Returns ``None`` for any text that
    fails validation.
    """
    resolved = _diagnose(text, variant)
    if isinstance(resolved, ErrorDetail):
        _LOGGER.debug("Rejected ULID text: code=%s", resolved.code)
        return None
    return _decode_checked(text, resolved)


def is_valid(text: str, variant: Variant | str | None = None) -> bool:
    """Return True when ``text`` decodes under ``variant`` (or its length)."""
    return not isinstance(_diagnose(text, variant), ErrorDetail)


def check(text: str, variant: Variant | str | None = None) -> ErrorDetail | None:
    """Return the first reason ``text`` is not a valid ULID, or ``None``."""
    resolved = _diagnose(text, variant)
    return resolved if isinstance(resolved, ErrorDetail) else None


def ulid_str_to_bytes(text: str, variant: Variant | str | None = None) -> bytes:
    """Decode ULID text into 16 bytes, raising ``UlidError`` when invalid."""
    resolved = _diagnose(text, variant)
    if isinstance(resolved, ErrorDetail):
        raise UlidError(resolved)
    return _decode_checked(text, resolved)


def ulid_bytes_to_str(value: bytes, variant: Variant | str = Variant.B32) -> str:
    """Encode 16 ULID bytes as text, raising ``UlidError`` when invalid."""
    text_format = _FORMATS[Variant.parse(variant)]
    return _encode_checked(require_ulid_bytes(value), text_format)


def require_ulid_bytes(value: object, *, field_name: str = "id") -> bytes:
    """Validate and normalize a value as canonical 16-byte ULID binary."""
    binary = _as_ulid_bytes(value)
    if binary is not None:
        return binary
    raise UlidError(
        format_error(
            f"{field_name} must be {ULID_BYTES_LENGTH}-byte ULID binary",
            code=codes.INVALID_BINARY_LENGTH,
            metadata={"field": field_name, "type": type(value).__name__},
        )
    )


def timestamp_ms(value: bytes) -> int:
    """Return the 48-bit millisecond timestamp prefix of a binary ULID."""
    binary = require_ulid_bytes(value)
    return int.from_bytes(binary[:TIMESTAMP_BYTES_LENGTH], byteorder="big", signed=False)


def ulid_datetime(value: bytes) -> datetime | None:
    """Return the ULID creation time as a timezone-aware UTC datetime.

    The 48-bit timestamp reaches the year 10889, past ``datetime.max``.
    Timestamps after 9999-12-31T23:59:59.999Z (``253402300799999`` ms) have no
    ``datetime`` and return ``None``; ``timestamp_ms`` still reads them.
    """
    millis = timestamp_ms(value)
    if millis > MAX_DATETIME_MS:
        return None
    return _UNIX_EPOCH + timedelta(milliseconds=millis)


def _as_ulid_bytes(value: object) -> bytes | None:
    """Return ``value`` as ``bytes`` when it is 16 bytes of binary data."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        binary = bytes(value)
        if len(binary) == ULID_BYTES_LENGTH:
            return binary
    return None


def _diagnose(text: object, variant: Variant | str | None) -> _TextFormat | ErrorDetail:
    """Resolve the text format for ``text``, or the first reason it is invalid."""
    if not isinstance(text, str):
        return format_error(
            "ULID text must be a string",
            code=codes.INVALID_TYPE,
            metadata={"type": type(text).__name__},
        )

    if variant is None:
        resolved = Variant.for_length(len(text))
        if resolved is None:
            return format_error(
                f"No ULID format has length {len(text)}",
                code=codes.NO_MATCHING_FORMAT,
                metadata={"length": str(len(text))},
            )
    else:
        resolved = Variant.parse(variant)
        if len(text) != resolved.text_length:
            return format_error(
                f"{resolved.value} ULID text must be exactly "
                f"{resolved.text_length} characters",
                code=codes.INVALID_LENGTH,
                metadata={"variant": resolved.value, "length": str(len(text))},
            )

    text_format = _FORMATS[resolved]
    detail = _scan(text, text_format)
    return text_format if detail is None else detail


def _scan(text: str, text_format: _TextFormat) -> ErrorDetail | None:
    """Check alphabet membership of every character and the leading range."""
    table = text_format.decode_table
    for position, char in enumerate(text):
        code_point = ord(char)
        if code_point > 0xFF or table[code_point] == INVALID_SYMBOL:
            return format_error(
                f"Invalid ULID character {char!r} at position {position}",
                metadata={
                    "variant": text_format.variant.value,
                    "position": str(position),
                },
            )

    if text_format.reject_leading_overflow:
        leading = table[ord(text[0])]
        if leading > text_format.leading_max:
            return range_error(
                f"Leading character {text[0]!r} exceeds the 128-bit ULID range",
                metadata={"variant": text_format.variant.value},
            )
    return None


def _decode_checked(text: str, text_format: _TextFormat) -> bytes:
    """Decode text that has already passed ``_scan``."""
    table = text_format.decode_table
    number = symbols_to_int(
        [table[ord(char)] for char in text],
        symbol_bits=text_format.symbol_bits,
    )
    return text_format.from_payload(number)


def _encode_checked(binary: bytes, text_format: _TextFormat) -> str:
    """Encode bytes already known to be 16 long."""
    symbols = int_to_symbols(
        text_format.to_payload(binary),
        count=text_format.length,
        symbol_bits=text_format.symbol_bits,
    )
    alphabet = text_format.alphabet
    return "".join(alphabet[symbol] for symbol in symbols)
