"""Tests for Bloom filter membership testing."""
from __future__ import annotations

import logging
import math
import random

import pytest

from fnvbloom.core.bloom import BloomFilter, IncompatibleFilterError
from fnvbloom.core.sizing import BloomParams

FRUIT_BUCKETS = [
    0, 1073741824, 64, 0, 0, 0, 0, 0, 0, 65536, 0, 16384, 0, 0, 1073741824, 0,
    0, 256, 0, 0, 8, 134217728, 1073741824, 0, 16384, 33554432, 0, 0, 0, 32, 0, 0,
]


class TestConstruction:
    def test_capacity_rounds_up(self):
        bf = BloomFilter(100, 3)
        assert bf.m == 128
        assert bf.k == 3
        assert len(bf.buckets) == 4

    def test_size_aliases(self):
        bf = BloomFilter(1000, 4)
        assert bf.size_bits == bf.m == 1024
        assert bf.num_hashes == bf.k == 4

    def test_starts_empty(self):
        bf = BloomFilter(256, 3)
        assert bf.buckets == (0,) * 8
        assert bf.set_bits() == 0

    def test_from_buckets(self):
        bf = BloomFilter([8, 0, 1], 2)
        assert bf.m == 96
        assert bf.buckets == (8, 0, 1)

    def test_from_params(self):
        bf = BloomFilter.from_params(BloomParams(bit_capacity=64, k=2))
        assert (bf.m, bf.k) == (64, 2)

    def test_for_capacity(self):
        bf = BloomFilter.for_capacity(1000, fp_rate=0.01)
        assert bf.m == 9600
        assert bf.k == 7

    def test_invalid_params(self):
        with pytest.raises(ValueError):
            BloomFilter(0, 3)
        with pytest.raises(ValueError):
            BloomFilter(-64, 3)
        with pytest.raises(ValueError):
            BloomFilter(64, 0)
        with pytest.raises(ValueError):
            BloomFilter([], 3)
        with pytest.raises(ValueError):
            BloomFilter([2 ** 32], 3)

    def test_invalid_types(self):
        with pytest.raises(TypeError):
            BloomFilter("1024", 3)
        with pytest.raises(TypeError):
            BloomFilter(1024.0, 3)


class TestBloomBasics:
    def test_concrete_scenario(self):
        """m=32, k=2: "x" maps to bit 3 twice, "y" to bits 5 and 17."""
        bf = BloomFilter(32, 2)
        bf.add("x")
        assert bf.serialize() == [8]
        assert bf.test("x")
        assert not bf.test("y")

    def test_empty_filter(self):
        bf = BloomFilter(1024, 4)
        assert not bf.test("anything")
        assert bf.size() == 0.0

    def test_add_and_check(self):
        bf = BloomFilter(1024, 4)
        bf.add("agent-001:api.openai.com")
        assert bf.test("agent-001:api.openai.com")
        assert "agent-001:api.openai.com" in bf

    def test_known_buckets(self):
        bf = BloomFilter(1000, 4)
        for word in ("apple", "banana", "cherry"):
            bf.add(word)
        assert bf.serialize() == FRUIT_BUCKETS
        assert bf.test("apple")
        assert not bf.test("durian")

    def test_values_are_stringified(self):
        bf = BloomFilter(64, 3)
        bf.add(5)
        assert bf.serialize() == [1025, 4194304]
        assert bf.test("5")
        assert bf.test(5.0)

    def test_unsupported_value(self):
        bf = BloomFilter(64, 3)
        with pytest.raises(TypeError):
            bf.add(b"raw")

    def test_no_false_negatives(self):
        """Every item that was added must return True."""
        bf = BloomFilter.for_capacity(10_000, fp_rate=0.01)
        items = [f"item-{i}" for i in range(5000)]
        bf.update(items)
        for item in items:
            assert bf.test(item), f"False negative for {item}"

    def test_no_false_negatives_tiny_filter(self):
        bf = BloomFilter(32, 3)
        items = [f"v{i}" for i in range(100)]
        bf.update(items)
        assert all(bf.test(item) for item in items)

    def test_idempotent_add(self):
        bf = BloomFilter(512, 3)
        bf.add("once")
        snapshot = bf.buckets
        for _ in range(10):
            bf.add("once")
        assert bf.buckets == snapshot

    def test_order_independent(self):
        items = [f"domain-{i}.example.com" for i in range(300)]
        shuffled = items[:]
        random.Random(42).shuffle(shuffled)

        a = BloomFilter(4096, 5)
        b = BloomFilter(4096, 5)
        a.update(items)
        b.update(shuffled)
        assert a == b
        assert a.buckets == b.buckets


class TestBloomEstimates:
    def test_size_known_value(self):
        bf = BloomFilter(1000, 4)
        for word in ("apple", "banana", "cherry"):
            bf.add(word)
        assert bf.size() == pytest.approx(3.0177166725228135)

    def test_size_single_item(self):
        bf = BloomFilter(32, 2)
        bf.add("x")
        assert bf.size() == pytest.approx(0.5079791730332848)

    def test_size_fifty_items(self):
        bf = BloomFilter(1024, 3)
        bf.update(f"item-{i}" for i in range(50))
        assert bf.size() == pytest.approx(51.729031894084585)

    def test_size_monotonic(self):
        bf = BloomFilter(2048, 4)
        previous = bf.size()
        for i in range(300):
            bf.add(f"item-{i}")
            current = bf.size()
            assert current >= previous
            previous = current

    def test_size_saturated_is_infinite(self):
        bf = BloomFilter(32, 1)
        bf.update(f"v{i}" for i in range(200))
        assert bf.serialize() == [-1]
        assert math.isinf(bf.size())
        assert bf.fill_ratio() == 1.0
        assert bf.estimated_fp_rate() == 1.0

    def test_fp_count_known_value(self):
        bf = BloomFilter(1024, 3)
        bf.update(f"item-{i}" for i in range(50))
        false_positives = sum(bf.test(f"item-{i}") for i in range(50, 1050))
        assert false_positives == 8

    def test_fp_rate_at_capacity(self):
        """Fill the filter to its expected capacity and measure FP rate."""
        n = 10_000
        bf = BloomFilter.for_capacity(n, fp_rate=0.01)
        bf.update(f"item-{i}" for i in range(n))

        test_count = 10_000
        false_positives = sum(
            bf.test(f"item-{i}") for i in range(n, n + test_count)
        )
        fp_rate = false_positives / test_count
        # Allow 3x the target rate (statistical variance)
        assert fp_rate < 0.03, f"FP rate {fp_rate:.4f} exceeds 3x target"

    def test_fill_ratio_and_memory(self):
        bf = BloomFilter(32, 2)
        bf.add("x")
        assert bf.set_bits() == 1
        assert bf.fill_ratio() == 1 / 32
        assert bf.estimated_fp_rate() == (1 / 32) ** 2
        assert bf.memory_bytes() == 4


class TestMergeAndCopy:
    def test_copy_is_independent(self):
        bf = BloomFilter(256, 3)
        bf.add("a")
        clone = bf.copy()
        assert clone == bf
        clone.add("b")
        assert clone != bf
        assert not bf.test("b")

    def test_merge_is_union(self):
        left = BloomFilter(1024, 4)
        right = BloomFilter(1024, 4)
        left.update(["apple", "banana"])
        right.add("cherry")
        left.merge(right)
        for word in ("apple", "banana", "cherry"):
            assert left.test(word)
        assert left.serialize() == FRUIT_BUCKETS

    def test_or_returns_new_filter(self):
        left = BloomFilter(1024, 4)
        right = BloomFilter(1024, 4)
        left.add("apple")
        right.add("banana")
        merged = left | right
        assert merged.test("apple") and merged.test("banana")
        assert not left.test("banana")

    def test_copy_skips_restore_path(self, caplog):
        bf = BloomFilter(256, 3)
        bf.add("a")
        with caplog.at_level(logging.DEBUG, logger="fnvbloom"):
            clone = bf.copy()
            merged = bf | clone
        assert clone == bf
        assert merged == bf
        assert not any("Restored" in r.getMessage() for r in caplog.records)

    def test_merge_rejects_non_filter(self):
        bf = BloomFilter(1024, 4)
        with pytest.raises(TypeError):
            bf.merge([0] * 32)
        with pytest.raises(TypeError):
            bf.merge(None)

    def test_merge_shape_mismatch(self):
        with pytest.raises(IncompatibleFilterError):
            BloomFilter(1024, 4).merge(BloomFilter(2048, 4))
        with pytest.raises(IncompatibleFilterError):
            BloomFilter(1024, 4).merge(BloomFilter(1024, 3))

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(BloomFilter(32, 1))

    def test_repr(self):
        bf = BloomFilter(32, 2)
        bf.add("x")
        assert repr(bf) == "BloomFilter(m=32, k=2, set_bits=1)"


class TestSerializeRoundTrip:
    def test_round_trip(self):
        bf = BloomFilter(2000, 5)
        bf.update(f"agent-{i}" for i in range(150))
        restored = BloomFilter(bf.serialize(), bf.k)
        assert restored == bf
        assert restored.m == bf.m
        for i in range(400):
            assert restored.test(f"agent-{i}") == bf.test(f"agent-{i}")

    def test_high_bit_serializes_negative(self):
        bf = BloomFilter([0x80000000], 1)
        assert bf.serialize() == [-(2 ** 31)]
        assert BloomFilter(bf.serialize(), 1).buckets == (0x80000000,)
