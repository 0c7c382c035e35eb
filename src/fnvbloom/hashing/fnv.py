"""Fowler/Noll/Vo (FNV-1a) string hashing with a seedable offset basis.

This is a nonstandard FNV-1a variant. The seed is XORed into the offset
basis ("almost any offset_basis will serve so long as it is non-zero",
per the FNV reference page), which turns one hash function into a family
of them. The result is finished with Bret Mulvey's avalanche mix so that
the low bits, which the bloom filter uses for bit positions, depend on
every input byte.

Everything here is 32-bit modular arithmetic. Python ints are unbounded,
so each step masks back to 32 bits; the final value is reinterpreted as
a signed int32. These exact constants and shift amounts are part of the
serialized-filter contract: change any of them and previously saved
filters will report false negatives.

References:
    http://www.isthe.com/chongo/tech/comp/fnv/index.html
    Mulvey, "Hash Functions", bretm/hash/6.html (avalanche mixing).
"""

from __future__ import annotations

from collections.abc import Iterator

OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
SECOND_SEED = 1576284489  # picked at random; only needs to differ from 0

_MASK32 = 0xFFFFFFFF


def _code_units(value: str) -> Iterator[int]:
    """Yield the UTF-16 code units of a string.

    Characters outside the Basic Multilingual Plane are split into their
    surrogate pair, so "😀" hashes as two 16-bit units.
    """
    for ch in value:
        cp = ord(ch)
        if cp > 0xFFFF:
            cp -= 0x10000
            yield 0xD800 | (cp >> 10)
            yield 0xDC00 | (cp & 0x3FF)
        else:
            yield cp


def fnv_multiply(a: int) -> int:
    """a * FNV_PRIME mod 2**32, spelled as shifts and adds.

    FNV_PRIME = 16777619 = 2**24 + 2**8 + 2**7 + 2**4 + 2**1 + 1
    """
    a &= _MASK32
    return (a + (a << 1) + (a << 4) + (a << 7) + (a << 8) + (a << 24)) & _MASK32


def fnv_mix(a: int) -> int:
    """Avalanche the accumulator and return it as a signed int32."""
    a &= _MASK32
    a = (a + (a << 13)) & _MASK32
    a ^= a >> 7
    a = (a + (a << 3)) & _MASK32
    a ^= a >> 17
    a = (a + (a << 5)) & _MASK32
    return a - (1 << 32) if a & 0x80000000 else a


def fnv_1a(value: str, seed: int = 0) -> int:
    """Hash a string to a signed 32-bit integer.

    Each UTF-16 code unit contributes its high byte (only when nonzero)
    and then its low byte. Each byte is XORed into the accumulator,
    which is then multiplied by the FNV prime.
    """
    a = (OFFSET_BASIS ^ seed) & _MASK32
    for c in _code_units(value):
        high = c & 0xFF00
        if high:
            a = fnv_multiply(a ^ (high >> 8))
        a = fnv_multiply(a ^ (c & 0xFF))
    return fnv_mix(a)
