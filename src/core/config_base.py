"""Settings fingerprinting helpers.

Fingerprints must remain stable across releases. Payloads carry an explicit
version key so that a change in their shape changes every fingerprint.
"""

from __future__ import annotations

from collections.abc import Mapping

from utils.hashing import hash_json_canonical


def config_fingerprint(payload: Mapping[str, object]) -> str:
    """Return a deterministic fingerprint for a settings payload.

    Parameters
    ----------
    payload
        Mapping of JSON-compatible setting values.

    Returns
    -------
    str
        SHA-256 hexdigest of the key-sorted JSON encoding.
    """
    return hash_json_canonical(payload, str_keys=True)


__all__ = ["config_fingerprint"]
