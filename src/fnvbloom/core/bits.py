"""Bit storage helpers over an array of 32-bit words.

The filter's bits live in an `array.array("I")`. Bit i is bit (i % 32)
of word (i // 32). Words are stored unsigned; the serialized form uses
signed int32, so the conversion helpers live here too.
"""

from __future__ import annotations

import array
from collections.abc import Iterable, Sequence

WORD_BITS = 32
_MASK32 = 0xFFFFFFFF


def word_count(bit_capacity: int) -> int:
    """Number of 32-bit words needed to hold bit_capacity bits."""
    return (bit_capacity + WORD_BITS - 1) // WORD_BITS


def make_buckets(words: int | Iterable[int]) -> array.array:
    """Allocate a zeroed word array, or copy words into a new one.

    Copied words may be given signed or unsigned; both map onto the same
    32 bits. Anything outside [-2**31, 2**32) raises ValueError.
    """
    if isinstance(words, int):
        return array.array("I", bytes(4 * words))
    buckets = array.array("I")
    for word in words:
        buckets.append(to_unsigned(word))
    return buckets


def set_bit(buckets: array.array, index: int) -> None:
    buckets[index // WORD_BITS] |= 1 << (index % WORD_BITS)


def test_bit(buckets: Sequence[int], index: int) -> bool:
    return (buckets[index // WORD_BITS] & (1 << (index % WORD_BITS))) != 0


def popcount(word: int) -> int:
    """Count set bits in a 32-bit word (parallel bit counting).

    See http://graphics.stanford.edu/~seander/bithacks.html#CountBitsSetParallel
    """
    v = word & _MASK32
    v -= (v >> 1) & 0x55555555
    v = (v & 0x33333333) + ((v >> 2) & 0x33333333)
    return ((((v + (v >> 4)) & 0x0F0F0F0F) * 0x01010101) & _MASK32) >> 24


def to_signed(word: int) -> int:
    """Reinterpret an unsigned 32-bit word as int32."""
    word &= _MASK32
    return word - (1 << 32) if word & 0x80000000 else word


def to_unsigned(word: int) -> int:
    """Reinterpret an int32 (or uint32) as an unsigned 32-bit word."""
    if not (-(1 << 31) <= word < (1 << 32)):
        raise ValueError(f"bucket word {word} does not fit in 32 bits")
    return word & _MASK32
