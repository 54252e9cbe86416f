"""Bit-slicing helpers shared by every ULID text variant.

Each variant is a big-endian integer cut into fixed-width symbols, most
significant first. When the integer width is not a multiple of the symbol
width, the leading symbol carries the remainder bits only.
"""

from __future__ import annotations

from typing import Sequence

INVALID_SYMBOL = -1


def build_decode_table(alphabet: str) -> tuple[int, ...]:
    """Return a 256-entry byte -> symbol value table for one alphabet."""
    table = [INVALID_SYMBOL] * 256
    for index, char in enumerate(alphabet):
        table[ord(char)] = index
    return tuple(table)


def int_to_symbols(number: int, *, count: int, symbol_bits: int) -> list[int]:
    """Slice ``number`` into ``count`` symbol values, most significant first."""
    mask = (1 << symbol_bits) - 1
    return [
        (number >> (symbol_bits * shift)) & mask
        for shift in range(count - 1, -1, -1)
    ]


def symbols_to_int(symbols: Sequence[int], *, symbol_bits: int) -> int:
    """Concatenate symbol values back into one integer."""
    number = 0
    for symbol in symbols:
        number = (number << symbol_bits) | symbol
    return number


def leading_symbol_bits(total_bits: int, symbol_bits: int) -> int:
    """Return how many significant bits the leading symbol carries."""
    remainder = total_bits % symbol_bits
    return remainder or symbol_bits
