"""Serialized forms of a BloomFilter.

Public API:
    to_json / from_json: bare bucket array, k kept by the caller
    dumps / loads: JSON envelope that carries k and m
    to_bytes / from_bytes: compact binary envelope
    save / load: envelope JSON on disk
    SerializationError: malformed payload
"""

from fnvbloom.serialization.codec import (
    SerializationError,
    dumps,
    from_bytes,
    from_json,
    load,
    loads,
    save,
    to_bytes,
    to_json,
)

__all__ = [
    "SerializationError",
    "dumps",
    "from_bytes",
    "from_json",
    "load",
    "loads",
    "save",
    "to_bytes",
    "to_json",
]
