"""Bloom filter core: storage, probe locations, sizing and the filter.

Public API:
    BloomFilter: the filter (add / test / size / serialize)
    BloomParams: validated (bit_capacity, k) bundle, with optimal sizing
    IncompatibleFilterError: merging filters of different shape
    locations: k bit positions for a key via double hashing
"""

from fnvbloom.core.bloom import BloomFilter, IncompatibleFilterError
from fnvbloom.core.locations import hash_pair, locations
from fnvbloom.core.sizing import (
    BloomParams,
    false_positive_rate,
    optimal_bits,
    optimal_hashes,
)

__all__ = [
    "BloomFilter",
    "BloomParams",
    "IncompatibleFilterError",
    "false_positive_rate",
    "hash_pair",
    "locations",
    "optimal_bits",
    "optimal_hashes",
]
