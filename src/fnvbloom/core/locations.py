"""Derive k bit positions from two hashes ("hashing only once").

Rather than run k independent hash functions, hash the key twice with
different seeds and walk a linear stride: location i is a + i*b mod m.
Kirsch & Mitzenmacher show this keeps the asymptotic false positive
rate of k truly independent hashes.

a and b are signed int32s, so the running remainder is normalized into
[0, m) at every step. Python's % on a positive modulus already returns
a non-negative result, which is exactly that normalization.

References:
    Kirsch & Mitzenmacher, "Less hashing, same performance", 2006.
    http://willwhim.wpengine.com/2011/09/03/producing-n-hash-functions-by-hashing-only-once/
"""

from __future__ import annotations

from fnvbloom.hashing.fnv import SECOND_SEED, fnv_1a


def hash_pair(key: str) -> tuple[int, int]:
    """The two base hashes for a key: unseeded and seeded FNV-1a."""
    return fnv_1a(key), fnv_1a(key, SECOND_SEED)


def locations(key: str, m: int, k: int) -> list[int]:
    """Return the k bit indices for a key in a filter of m bits.

    Every index satisfies 0 <= index < m. Indices may repeat (when the
    stride b is a multiple of m, all k indices coincide).
    """
    a, b = hash_pair(key)
    x = a % m
    result = []
    for _ in range(k):
        result.append(x)
        x = (x + b) % m
    return result
