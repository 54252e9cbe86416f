"""Shared ULID width, length, and alphabet constants.

This module centralizes the scalar values used by the generator, the codec,
and the SQLAlchemy binding so every layer relies on one canonical source.
"""

ULID_BYTES_LENGTH = 16
ULID_BITS = ULID_BYTES_LENGTH * 8

TIMESTAMP_BYTES_LENGTH = 6
RANDOMNESS_BYTES_LENGTH = ULID_BYTES_LENGTH - TIMESTAMP_BYTES_LENGTH
MAX_TIMESTAMP_MS = (1 << (TIMESTAMP_BYTES_LENGTH * 8)) - 1

# Push keys drop the first randomness byte so 120 bits fill 20 symbols exactly.
PUSH_FILLER_OFFSET = TIMESTAMP_BYTES_LENGTH
PUSH_PAYLOAD_BITS = ULID_BITS - 8

BASE32_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
BASE64_ALPHABET = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"

BASE32_LENGTH = 26
BASE64_LENGTH = 22
PUSH_KEY_LENGTH = 20
