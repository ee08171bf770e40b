"""SHA-256 fingerprints over msgspec encodings."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

from serde_msgspec import JSON_ENCODER_SORTED, dumps_msgpack, to_builtins


def hash_sha256_hex(payload: bytes, *, length: int | None = None) -> str:
    """Return the SHA-256 hexdigest of ``payload``, cut to ``length`` if given.

    Returns:
    -------
    str
        Hex digest.
    """
    digest = hashlib.sha256(payload).hexdigest()
    return digest[:length] if length is not None else digest


def hash_msgpack_canonical(payload: object) -> str:
    """Fingerprint ``payload`` independent of mapping key order.

    Returns:
    -------
    str
        SHA-256 hexdigest of the key-sorted msgpack encoding.
    """
    return hash_sha256_hex(dumps_msgpack(payload))


def hash_msgpack_ordered(payload: object) -> str:
    """Fingerprint ``payload`` with mapping key order significant.

    Returns:
    -------
    str
        SHA-256 hexdigest of the insertion-ordered msgpack encoding.
    """
    return hash_sha256_hex(dumps_msgpack(payload, ordered=True))


def hash_json_canonical(payload: object, *, str_keys: bool = False) -> str:
    """Fingerprint ``payload`` through its key-sorted JSON encoding.

    Returns:
    -------
    str
        SHA-256 hexdigest.
    """
    return hash_sha256_hex(JSON_ENCODER_SORTED.encode(to_builtins(payload, str_keys=str_keys)))


@dataclass
class CacheKeyBuilder:
    """Accumulate named components into one prefixed fingerprint."""

    prefix: str = ""
    _components: dict[str, object] = field(default_factory=dict)

    def add(self, name: str, value: object) -> CacheKeyBuilder:
        """Record a component and return the builder for chaining.

        Returns:
        -------
        CacheKeyBuilder
            This builder.
        """
        self._components[name] = value
        return self

    def build(self) -> str:
        """Return ``prefix:digest`` (or the bare digest without a prefix).

        Returns:
        -------
        str
            Cache key.
        """
        digest = hash_msgpack_canonical(self._components)
        return f"{self.prefix}:{digest}" if self.prefix else digest


__all__ = [
    "CacheKeyBuilder",
    "hash_json_canonical",
    "hash_msgpack_canonical",
    "hash_msgpack_ordered",
    "hash_sha256_hex",
]
