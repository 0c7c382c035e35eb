"""fnvbloom: a Bloom filter with FNV-1a double hashing.

    from fnvbloom import BloomFilter

    bf = BloomFilter(1024, 4)
    bf.add("apple")
    bf.test("apple")     # True
    bf.test("durian")    # False (probably)
    words = bf.serialize()
    BloomFilter(words, 4) == bf   # True
"""

from fnvbloom.core import BloomFilter, BloomParams, IncompatibleFilterError
from fnvbloom.hashing import canonical_string, fnv_1a
from fnvbloom.serialization import SerializationError

__all__ = [
    "BloomFilter",
    "BloomParams",
    "IncompatibleFilterError",
    "SerializationError",
    "canonical_string",
    "fnv_1a",
]
