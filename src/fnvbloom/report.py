"""Human-readable summary of a filter's state, for the CLI."""
from __future__ import annotations

import math

from fnvbloom.core.bloom import BloomFilter


def format_info(bf: BloomFilter, label: str = "Bloom filter") -> str:
    """Format size, fill and error estimates as a readable report string."""
    size = bf.size()
    estimate = "saturated" if math.isinf(size) else f"{size:,.1f}"
    lines = [
        f"=== {label} ===",
        f"Bits (m):          {bf.m:,}",
        f"Hashes (k):        {bf.k}",
        f"Memory:            {bf.memory_bytes():,} bytes",
        f"Set bits:          {bf.set_bits():,}",
        f"Fill ratio:        {bf.fill_ratio():.4f}",
        f"Estimated items:   {estimate}",
        f"Estimated FP rate: {bf.estimated_fp_rate():.6f}",
    ]
    return "\n".join(lines)
