"""Filter parameters and the classic sizing formulas.

Given n expected elements and a target false positive rate p:

    m = -(n * ln(p)) / (ln(2)^2)     bits
    k = (m / n) * ln(2)              hash rounds

and for a filter of m bits and k rounds holding n elements the expected
false positive rate is (1 - e^(-k*n/m))^k.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from fnvbloom.core.bits import WORD_BITS, word_count


def optimal_bits(expected: int, fp_rate: float) -> int:
    """Compute the bit capacity m for a given capacity and FP rate."""
    if expected <= 0:
        raise ValueError(f"expected must be positive, got {expected}")
    if not (0.0 < fp_rate < 1.0):
        raise ValueError(f"fp_rate must be in (0, 1), got {fp_rate}")
    m = -(expected * math.log(fp_rate)) / (math.log(2) ** 2)
    return max(WORD_BITS, int(math.ceil(m)))


def optimal_hashes(m: int, expected: int) -> int:
    """Compute the number of hash rounds k for m bits and n elements."""
    if expected <= 0:
        raise ValueError(f"expected must be positive, got {expected}")
    k = (m / expected) * math.log(2)
    return max(1, int(round(k)))


def false_positive_rate(m: int, k: int, n: int) -> float:
    """Theoretical FP rate after n distinct insertions."""
    if n <= 0:
        return 0.0
    return (1.0 - math.exp(-k * n / m)) ** k


@dataclass(frozen=True, slots=True)
class BloomParams:
    """Validated construction parameters for a BloomFilter.

    bit_capacity is the requested size; the filter rounds it up to a
    multiple of 32 (see `m`).
    """
    bit_capacity: int
    k: int

    def __post_init__(self) -> None:
        if isinstance(self.bit_capacity, bool) or not isinstance(self.bit_capacity, int):
            raise TypeError(
                f"bit_capacity must be an int, got {type(self.bit_capacity).__name__}"
            )
        if isinstance(self.k, bool) or not isinstance(self.k, int):
            raise TypeError(f"k must be an int, got {type(self.k).__name__}")
        if self.bit_capacity <= 0:
            raise ValueError(f"bit_capacity must be positive, got {self.bit_capacity}")
        if self.k < 1:
            raise ValueError(f"k must be at least 1, got {self.k}")

    @property
    def m(self) -> int:
        """Actual bit count after rounding up to whole words."""
        return word_count(self.bit_capacity) * WORD_BITS

    @classmethod
    def for_capacity(cls, expected_elements: int, fp_rate: float = 0.01) -> BloomParams:
        """Parameters that hold expected_elements at roughly fp_rate."""
        m = optimal_bits(expected_elements, fp_rate)
        return cls(bit_capacity=m, k=optimal_hashes(m, expected_elements))

    def expected_fp_rate(self, n: int) -> float:
        return false_positive_rate(self.m, self.k, n)
