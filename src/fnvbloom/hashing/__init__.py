"""Hash primitives for the bloom filter.

Public API:
    fnv_1a: seedable FNV-1a string hash, signed 32-bit result
    fnv_multiply, fnv_mix: the two building blocks of fnv_1a
    canonical_string: value -> string conversion applied before hashing
"""

from fnvbloom.hashing.fnv import (
    FNV_PRIME,
    OFFSET_BASIS,
    SECOND_SEED,
    fnv_1a,
    fnv_mix,
    fnv_multiply,
)
from fnvbloom.hashing.keys import canonical_string

__all__ = [
    "FNV_PRIME",
    "OFFSET_BASIS",
    "SECOND_SEED",
    "canonical_string",
    "fnv_1a",
    "fnv_mix",
    "fnv_multiply",
]
