"""Tests for hashing helpers."""

from __future__ import annotations

from utils.hashing import (
    CacheKeyBuilder,
    hash_json_canonical,
    hash_msgpack_canonical,
    hash_msgpack_ordered,
    hash_sha256_hex,
)


def test_hash_sha256_hex_truncation() -> None:
    """Ensure digests can be truncated."""
    digest = hash_sha256_hex(b"payload")
    assert len(digest) == 64
    assert hash_sha256_hex(b"payload", length=12) == digest[:12]


def test_canonical_hashes_ignore_key_order() -> None:
    """Ensure canonical encodings sort mapping keys."""
    assert hash_msgpack_canonical({"a": 1, "b": 2}) == hash_msgpack_canonical({"b": 2, "a": 1})
    assert hash_json_canonical({"a": 1, "b": 2}) == hash_json_canonical({"b": 2, "a": 1})


def test_ordered_hash_respects_key_order() -> None:
    """Ensure the ordered encoding keeps insertion order significant."""
    assert hash_msgpack_ordered({"a": 1, "b": 2}) != hash_msgpack_ordered({"b": 2, "a": 1})


def test_cache_key_builder_prefix() -> None:
    """Ensure cache keys carry the prefix and depend on components."""
    key = CacheKeyBuilder(prefix="combine").add("left", "x").add("right", "y").build()
    other = CacheKeyBuilder(prefix="combine").add("left", "x").add("right", "z").build()
    assert key.startswith("combine:")
    assert key != other
