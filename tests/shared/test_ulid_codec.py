"""Tests for ULID text validation, variant dispatch, and strict helpers."""

from __future__ import annotations

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from packages.ulid_shared.errors import ErrorCategory, UlidError, codes
from packages.ulid_shared.ids import (
    MAX_DATETIME_MS,
    Variant,
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

_ZERO = bytes(16)
_ONES = b"\xff" * 16
_BINARY = bytes.fromhex("015FC23C6C49D17288EC85736AC39116")


def test_zero_binary_encodes_to_first_symbol_in_every_variant() -> None:
    """An all-zero ULID must encode to the alphabet's first symbol repeated."""
    assert encode(_ZERO, Variant.B32) == "0" * 26
    assert encode(_ZERO, Variant.B64) == "-" * 22
    assert encode(_ZERO, Variant.PUSH) == "-" * 20


def test_max_binary_encodes_with_narrow_leading_symbol() -> None:
    """Leading symbols only carry the remainder bits of the layout."""
    assert encode(_ONES, Variant.B32) == "7" + "Z" * 25
    assert encode(_ONES, Variant.B64) == "2" + "z" * 21
    assert encode(_ONES, Variant.PUSH) == "z" * 20


def test_base64_symbols_follow_custom_alphabet_order() -> None:
    """Base64 symbols must come from the ``-0-9A-Z_a-z`` alphabet in order."""
    assert encode(bytes(15) + b"\x01", Variant.B64) == "-" * 21 + "0"
    assert encode(b"\x04" + bytes(15), Variant.B64) == "-3" + "-" * 20


def test_push_key_skips_filler_byte() -> None:
    """Push keys encode the timestamp and the low 72 randomness bits only."""
    assert encode(b"\x04" + bytes(15), Variant.PUSH) == "0" + "-" * 19
    assert encode(bytes(15) + b"\x3f", Variant.PUSH) == "-" * 19 + "z"
    assert encode(bytes(6) + b"\xff" + bytes(9), Variant.PUSH) == "-" * 20


def test_push_key_decode_restores_zero_filler() -> None:
    """Decoding a push key must re-insert a zero byte at offset six."""
    assert decode("z" * 20, Variant.PUSH) == b"\xff" * 6 + b"\x00" + b"\xff" * 9


def test_encode_rejects_binary_of_wrong_length() -> None:
    """Binary input must be exactly 16 bytes."""
    assert encode(bytes(15)) is None
    assert encode(bytes(17)) is None
    assert encode("0" * 16) is None  # type: ignore[arg-type]


def test_encode_accepts_bytearray_and_memoryview() -> None:
    """Bytes-like values of the right width must be accepted."""
    assert encode(bytearray(_BINARY)) == encode(_BINARY)
    assert encode(memoryview(_BINARY)) == encode(_BINARY)


def test_decode_accepts_all_zero_text() -> None:
    """Text made of the zero symbol decodes to all-zero bytes."""
    assert decode("0" * 26) == _ZERO
    assert decode("-" * 22) == _ZERO
    assert decode("-" * 20) == _ZERO


@pytest.mark.parametrize(
    "text",
    [
        "0" * 25,
        "0" * 27,
        "I" + "0" * 25,
        "L" + "0" * 25,
        "O" + "0" * 25,
        "U" + "0" * 25,
        "$" + "0" * 25,
        "0" * 25 + "i",
        "01bz13rv29t5s8hv45ednc748p",
        "0" * 25 + "é",
    ],
)
def test_base32_decode_rejects_malformed_text(text: str) -> None:
    """Wrong lengths and out-of-alphabet characters must be rejected."""
    assert decode(text, Variant.B32) is None
    assert not is_valid(text, Variant.B32)


@pytest.mark.parametrize("leading", ["8", "9", "A", "Z"])
def test_base32_rejects_leading_character_above_seven(leading: str) -> None:
    """An in-alphabet leading character above 7 overflows 128 bits."""
    text = leading + "0" * 25

    assert decode(text) is None
    assert not is_valid(text)
    detail = check(text)
    assert detail is not None
    assert detail.code == codes.LEADING_CHARACTER_OUT_OF_RANGE
    assert detail.category == ErrorCategory.RANGE


def test_base32_accepts_largest_leading_character() -> None:
    """A leading ``7`` is the largest valid Base32 prefix."""
    assert decode("7" + "Z" * 25) == _ONES


def test_base64_rejects_characters_outside_alphabet() -> None:
    """Base64 variants must reject symbols outside ``-0-9A-Z_a-z``."""
    assert not is_valid("+" + "-" * 21, Variant.B64)
    assert not is_valid("-" * 19 + "/", Variant.PUSH)
    assert not is_valid("=" * 22)


def test_base64_leading_symbol_keeps_low_bits_only() -> None:
    """Base64 has no leading-range check; extra high bits are discarded."""
    text = "z" + "-" * 21

    assert is_valid(text, Variant.B64)
    assert decode(text, Variant.B64) == b"\xc0" + bytes(15)


def test_decode_dispatches_on_length_when_variant_is_omitted() -> None:
    """Without a variant, 26/22/20 characters select B32/B64/push."""
    b64 = encode(_BINARY, Variant.B64)
    push = encode(_BINARY, Variant.PUSH)
    assert b64 is not None and push is not None

    assert decode(b64) == _BINARY
    assert decode(push) == _BINARY[:6] + b"\x00" + _BINARY[7:]


def test_unknown_length_reports_no_matching_format() -> None:
    """Lengths matching no variant fail dispatch rather than one variant."""
    detail = check("0" * 21)

    assert detail is not None
    assert detail.code == codes.NO_MATCHING_FORMAT
    assert decode("0" * 21) is None


def test_explicit_variant_reports_length_mismatch() -> None:
    """An explicit variant turns a wrong length into a length error."""
    detail = check("-" * 22, Variant.PUSH)

    assert detail is not None
    assert detail.code == codes.INVALID_LENGTH
    assert detail.metadata["variant"] == "push"


def test_explicit_variant_does_not_fall_back_to_length_dispatch() -> None:
    """Valid Base32 text is still rejected when Base64 is requested."""
    assert decode("0" * 26, Variant.B64) is None
    assert decode("0" * 26, "b32") == _ZERO


def test_check_reports_first_invalid_character_position() -> None:
    """Character errors must name the offending position."""
    detail = check("0" * 10 + "U" + "0" * 15)

    assert detail is not None
    assert detail.code == codes.INVALID_CHARACTER
    assert detail.category == ErrorCategory.FORMAT
    assert detail.metadata["position"] == "10"


def test_non_string_text_is_rejected_without_raising() -> None:
    """Non-string input is an ordinary validation failure."""
    assert decode(b"0" * 26) is None  # type: ignore[arg-type]
    assert not is_valid(None)  # type: ignore[arg-type]
    detail = check(42)  # type: ignore[arg-type]
    assert detail is not None
    assert detail.code == codes.INVALID_TYPE


def test_unknown_variant_raises() -> None:
    """Variant names outside the closed set are a caller error."""
    with pytest.raises(UlidError) as exc_info:
        decode("0" * 26, "b16")

    assert exc_info.value.code == codes.INVALID_VARIANT


def test_variant_parse_accepts_names_in_any_case() -> None:
    """String variant names normalize to enum members."""
    assert Variant.parse("B64") is Variant.B64
    assert Variant.parse(" push ") is Variant.PUSH
    assert Variant.parse(Variant.B32) is Variant.B32


def test_variant_for_length() -> None:
    """Length dispatch must cover exactly the three fixed widths."""
    assert Variant.for_length(26) is Variant.B32
    assert Variant.for_length(22) is Variant.B64
    assert Variant.for_length(20) is Variant.PUSH
    assert Variant.for_length(16) is None


def test_strict_decode_raises_with_detail() -> None:
    """Strict decoding must raise ``UlidError`` carrying the failure detail."""
    with pytest.raises(UlidError) as exc_info:
        ulid_str_to_bytes("8" + "0" * 25)

    assert isinstance(exc_info.value, ValueError)
    assert exc_info.value.category == ErrorCategory.RANGE


def test_strict_encode_raises_for_wrong_width() -> None:
    """Strict encoding must reject binaries that are not 16 bytes."""
    with pytest.raises(UlidError) as exc_info:
        ulid_bytes_to_str(bytes(10))

    assert exc_info.value.code == codes.INVALID_BINARY_LENGTH


def test_require_ulid_bytes_normalizes_bytearray() -> None:
    """Byte-like input of the right width is returned as ``bytes``."""
    value = require_ulid_bytes(bytearray(_BINARY))

    assert isinstance(value, bytes)
    assert value == _BINARY
    with pytest.raises(UlidError):
        require_ulid_bytes("not-bytes", field_name="owner_id")


def test_timestamp_helpers_read_48_bit_prefix() -> None:
    """Timestamp helpers must read the first six bytes big-endian."""
    assert timestamp_ms(_BINARY) == 0x015FC23C6C49

    seeded = (1469918176385).to_bytes(6, "big") + bytes(10)
    assert ulid_datetime(seeded) == datetime(2016, 7, 30, 22, 36, 16, 385000, tzinfo=UTC)


def test_timestamp_helpers_at_48_bit_maximum() -> None:
    """The largest Base32 ULID reads back the full 48-bit timestamp."""
    binary = decode("7" + "Z" * 25)

    assert binary == _ONES
    assert timestamp_ms(binary) == (1 << 48) - 1
    assert ulid_datetime(binary) is None


def test_ulid_datetime_stops_at_last_representable_millisecond() -> None:
    """Year 9999 still converts; one millisecond later has no datetime."""
    last = MAX_DATETIME_MS.to_bytes(6, "big") + bytes(10)
    past = (MAX_DATETIME_MS + 1).to_bytes(6, "big") + bytes(10)

    assert MAX_DATETIME_MS == 253402300799999
    assert ulid_datetime(last) == datetime(9999, 12, 31, 23, 59, 59, 999000, tzinfo=UTC)
    assert ulid_datetime(past) is None


def test_strict_and_lenient_paths_agree() -> None:
    """Strict helpers return exactly what the lenient codec returns."""
    for variant in Variant:
        text = ulid_bytes_to_str(_BINARY, variant)
        assert text == encode(_BINARY, variant)
        assert ulid_str_to_bytes(text, variant) == decode(text, variant)
