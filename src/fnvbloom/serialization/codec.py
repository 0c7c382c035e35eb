"""Encodings of a BloomFilter's buckets.

Three forms, all built on `BloomFilter.serialize()` (the bucket words as
signed int32s, in order):

Bare JSON array, e.g. "[8]":
    Byte-for-byte what bloomfilter.js serialize() emits. k is NOT
    included; the caller keeps it.

JSON envelope:
    {"format": "fnvbloom", "version": 1, "k": 2, "m": 32, "buckets": [8]}
    Self-describing, so load() needs nothing else. This is what save()
    writes to disk.

Binary:
    4 bytes: magic b"FNVB"
    4 bytes: k (big-endian uint32)
    4 bytes: word count n (big-endian uint32)
    4n bytes: bucket words (big-endian int32)

Every decoder raises SerializationError on malformed input.
"""
from __future__ import annotations

import json
import logging
import os
import struct

from fnvbloom.core.bits import WORD_BITS
from fnvbloom.core.bloom import BloomFilter

log = logging.getLogger(__name__)

FORMAT_NAME = "fnvbloom"
FORMAT_VERSION = 1
MAGIC = b"FNVB"
HEADER = struct.Struct("!4sII")  # magic, k, word count


class SerializationError(ValueError):
    """Raised when a payload cannot be decoded into a BloomFilter."""


def _check_words(words: object) -> list[int]:
    if not isinstance(words, list):
        raise SerializationError(
            f"buckets must be a JSON array, got {type(words).__name__}"
        )
    for i, word in enumerate(words):
        if isinstance(word, bool) or not isinstance(word, int):
            raise SerializationError(f"bucket {i} is not an integer: {word!r}")
    return words


def _restore(words: list[int], k: int) -> BloomFilter:
    try:
        bf = BloomFilter(words, k)
    except (TypeError, ValueError) as exc:
        raise SerializationError(str(exc)) from exc
    log.debug("Restored filter from %d words (m=%d, k=%d)", len(words), bf.m, bf.k)
    return bf


def _parse_json(text: str | bytes) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"invalid JSON: {exc}") from exc


def to_json(bf: BloomFilter) -> str:
    """Bare bucket array as compact JSON (k not included)."""
    return json.dumps(bf.serialize(), separators=(",", ":"))


def from_json(text: str | bytes, k: int) -> BloomFilter:
    """Rebuild a filter from to_json() output and the original k."""
    return _restore(_check_words(_parse_json(text)), k)


def dumps(bf: BloomFilter) -> str:
    """Self-describing JSON envelope including k and m."""
    return json.dumps(
        {
            "format": FORMAT_NAME,
            "version": FORMAT_VERSION,
            "k": bf.k,
            "m": bf.m,
            "buckets": bf.serialize(),
        },
        separators=(",", ":"),
    )


def loads(text: str | bytes) -> BloomFilter:
    """Rebuild a filter from dumps() output."""
    obj = _parse_json(text)
    if not isinstance(obj, dict):
        raise SerializationError(
            f"envelope must be a JSON object, got {type(obj).__name__}"
        )
    if obj.get("format") != FORMAT_NAME:
        raise SerializationError(f"not a {FORMAT_NAME} document: format={obj.get('format')!r}")
    if obj.get("version") != FORMAT_VERSION:
        raise SerializationError(f"unsupported version {obj.get('version')!r}")
    try:
        k = obj["k"]
        m = obj["m"]
        words = _check_words(obj["buckets"])
    except KeyError as exc:
        raise SerializationError(f"missing field {exc.args[0]!r}") from exc
    if m != len(words) * WORD_BITS:
        raise SerializationError(
            f"m={m} does not match {len(words)} bucket words "
            f"({len(words) * WORD_BITS} bits)"
        )
    return _restore(words, k)


def to_bytes(bf: BloomFilter) -> bytes:
    """Binary encoding: header followed by big-endian int32 words."""
    words = bf.serialize()
    return HEADER.pack(MAGIC, bf.k, len(words)) + struct.pack(f"!{len(words)}i", *words)


def from_bytes(data: bytes) -> BloomFilter:
    """Rebuild a filter from to_bytes() output."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise SerializationError(
            f"binary payload must be bytes-like, got {type(data).__name__}"
        )
    data = bytes(data)
    if len(data) < HEADER.size:
        raise SerializationError(
            f"payload too short: {len(data)} bytes, header needs {HEADER.size}"
        )
    magic, k, n = HEADER.unpack_from(data)
    if magic != MAGIC:
        raise SerializationError(f"bad magic {magic!r}, expected {MAGIC!r}")
    expected = HEADER.size + 4 * n
    if len(data) != expected:
        raise SerializationError(
            f"payload is {len(data)} bytes, header promises {expected}"
        )
    words = list(struct.unpack_from(f"!{n}i", data, HEADER.size))
    return _restore(words, k)


def save(bf: BloomFilter, path: str | os.PathLike[str]) -> None:
    """Write the JSON envelope to a file."""
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(dumps(bf))
    log.debug("Saved filter (m=%d, k=%d) to %s", bf.m, bf.k, path)


def load(path: str | os.PathLike[str]) -> BloomFilter:
    """Read a filter written by save()."""
    with open(path, encoding="utf-8") as fh:
        text = fh.read()
    bf = loads(text)
    log.debug("Loaded filter (m=%d, k=%d) from %s", bf.m, bf.k, path)
    return bf
