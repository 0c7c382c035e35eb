"""Bloom filter for approximate set membership.

Answers "has this value been added?" with either "definitely not" or
"probably". False positives are possible, false negatives are not: if
the filter says no, the value was never added.

The filter is m bits (a whole number of 32-bit words) probed at k
positions per value. The k positions come from two FNV-1a hashes via
double hashing, see `fnvbloom.core.locations`. Values are hashed as
strings; `fnvbloom.hashing.keys.canonical_string` defines the
conversion.

There is no deletion and no resizing. A filter is not thread-safe:
concurrent add() calls can lose updates on a shared word, so serialize
writers yourself. Concurrent test() calls with no writer are fine.

References:
    Bloom, "Space/time trade-offs in hash coding with allowable errors", 1970.
    Kirsch & Mitzenmacher, "Less hashing, same performance", 2006.
"""

from __future__ import annotations

import array
import logging
import math
from collections.abc import Iterable

from fnvbloom.core import bits
from fnvbloom.core.bits import WORD_BITS
from fnvbloom.core.locations import locations
from fnvbloom.core.sizing import BloomParams
from fnvbloom.hashing.keys import canonical_string

log = logging.getLogger(__name__)


class IncompatibleFilterError(ValueError):
    """Raised when combining filters whose m or k differ."""


class BloomFilter:
    """Bloom filter with FNV-1a double hashing.

    Parameters:
        capacity_or_buckets: Either the requested number of bits (rounded
            up to a multiple of 32), or a sequence of 32-bit words from
            a previous `serialize()`, in which case m = 32 * len(words).
        k: Number of bit positions probed per value. Must be >= 1.

    k is not part of the serialized words. Keep it alongside them (or
    use the envelope formats in `fnvbloom.serialization`).
    """

    def __init__(self, capacity_or_buckets: int | Iterable[int], k: int) -> None:
        if isinstance(capacity_or_buckets, int):
            params = BloomParams(bit_capacity=capacity_or_buckets, k=k)
            self._buckets = bits.make_buckets(bits.word_count(params.bit_capacity))
        else:
            if isinstance(capacity_or_buckets, (str, bytes)) or not isinstance(
                capacity_or_buckets, Iterable
            ):
                raise TypeError(
                    "expected a bit capacity or a sequence of 32-bit words, "
                    f"got {type(capacity_or_buckets).__name__}"
                )
            buckets = bits.make_buckets(capacity_or_buckets)
            if not buckets:
                raise ValueError("cannot restore a filter from an empty bucket sequence")
            params = BloomParams(bit_capacity=len(buckets) * WORD_BITS, k=k)
            self._buckets = buckets
        self._m = params.m
        self._k = params.k

    @classmethod
    def from_params(cls, params: BloomParams) -> BloomFilter:
        return cls(params.bit_capacity, params.k)

    @classmethod
    def for_capacity(cls, expected_elements: int, fp_rate: float = 0.01) -> BloomFilter:
        """Build a filter sized to hold expected_elements at fp_rate."""
        return cls.from_params(BloomParams.for_capacity(expected_elements, fp_rate))

    @property
    def m(self) -> int:
        """Number of bits in the filter (a multiple of 32)."""
        return self._m

    @property
    def k(self) -> int:
        """Number of positions probed per value."""
        return self._k

    size_bits = m
    num_hashes = k

    @property
    def buckets(self) -> tuple[int, ...]:
        """Snapshot of the bucket words, unsigned."""
        return tuple(self._buckets)

    def add(self, value: object) -> None:
        """Add a value to the filter."""
        buckets = self._buckets
        for index in locations(canonical_string(value), self._m, self._k):
            bits.set_bit(buckets, index)

    def update(self, values: Iterable[object]) -> None:
        """Add every value from an iterable."""
        for value in values:
            self.add(value)

    def test(self, value: object) -> bool:
        """Check if a value might be in the filter.

        Returns True if the value is probably in the set (could be a
        false positive). Returns False if it is definitely not.
        """
        buckets = self._buckets
        for index in locations(canonical_string(value), self._m, self._k):
            if not bits.test_bit(buckets, index):
                return False
        return True

    def __contains__(self, value: object) -> bool:
        return self.test(value)

    def set_bits(self) -> int:
        """Total number of set bits."""
        total = 0
        for word in self._buckets:
            total += bits.popcount(word)
        return total

    def size(self) -> float:
        """Estimate the number of distinct values added.

        Uses -m * ln(1 - X/m) / k where X is the number of set bits.
        The estimate degrades as the filter fills up; once every bit is
        set it is math.inf.
        """
        set_bits = self.set_bits()
        if set_bits == 0:
            return 0.0
        if set_bits >= self._m:
            return math.inf
        return -self._m * math.log(1 - set_bits / self._m) / self._k

    def fill_ratio(self) -> float:
        """Fraction of bits that are set."""
        return self.set_bits() / self._m

    def estimated_fp_rate(self) -> float:
        """Estimate the current false positive rate from the fill ratio.

        FP rate ~= fill_ratio ** k. Unlike the textbook formula this does
        not need to know how many values were added.
        """
        fr = self.fill_ratio()
        if fr >= 1.0:
            return 1.0
        return fr ** self._k

    def memory_bytes(self) -> int:
        """Memory used by the bit array."""
        return len(self._buckets) * 4

    def serialize(self) -> list[int]:
        """Bucket words in order, as signed 32-bit integers."""
        return [bits.to_signed(word) for word in self._buckets]

    def copy(self) -> BloomFilter:
        clone = type(self).__new__(type(self))
        clone._m = self._m
        clone._k = self._k
        clone._buckets = array.array("I", self._buckets)
        return clone

    def merge(self, other: BloomFilter) -> None:
        """Merge another filter into this one (union).

        Afterwards this filter reports every value either filter held.
        Both filters must share m and k, otherwise the same value maps
        to different bits and the union is meaningless.

        Raises:
            TypeError: other is not a BloomFilter.
            IncompatibleFilterError: m or k differ.
        """
        if not isinstance(other, BloomFilter):
            raise TypeError(f"can only merge a BloomFilter, got {type(other).__name__}")
        if self._m != other._m or self._k != other._k:
            raise IncompatibleFilterError(
                f"Cannot merge filters with different shape: "
                f"m={self._m}, k={self._k} vs m={other._m}, k={other._k}"
            )
        for i, word in enumerate(other._buckets):
            self._buckets[i] |= word
        log.debug("Merged filter (m=%d, k=%d)", self._m, self._k)

    def __or__(self, other: object) -> BloomFilter:
        if not isinstance(other, BloomFilter):
            return NotImplemented
        merged = self.copy()
        merged.merge(other)
        return merged

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BloomFilter):
            return NotImplemented
        return (
            self._m == other._m
            and self._k == other._k
            and self._buckets == other._buckets
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"BloomFilter(m={self._m}, k={self._k}, set_bits={self.set_bits()})"
