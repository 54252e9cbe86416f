"""Shared ULID error code constants.

These constants are stable machine-readable identifiers for every way a ULID
value, text, or parameter can be rejected.
"""

# Format
INVALID_TYPE = "INVALID_TYPE"
INVALID_LENGTH = "INVALID_LENGTH"
INVALID_CHARACTER = "INVALID_CHARACTER"
NO_MATCHING_FORMAT = "NO_MATCHING_FORMAT"
INVALID_BINARY_LENGTH = "INVALID_BINARY_LENGTH"
INVALID_VARIANT = "INVALID_VARIANT"

# Range
LEADING_CHARACTER_OUT_OF_RANGE = "LEADING_CHARACTER_OUT_OF_RANGE"
TIMESTAMP_OUT_OF_RANGE = "TIMESTAMP_OUT_OF_RANGE"

# Environment
SHORT_ENTROPY_READ = "SHORT_ENTROPY_READ"
